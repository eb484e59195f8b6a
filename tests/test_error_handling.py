"""Test error handling functionality.

Verifies that custom exceptions carry the expected attributes and are
rendered as JSON error bodies.
"""
import json

import pytest
from core.exceptions import (
    ConfigurationError,
    DocumentError,
    NotFoundError,
    ProviderError,
    RateLimitError,
    ValidationError,
)
from core.error_handlers import create_error_response


def test_exception_classes_have_proper_attributes():
    """Test that custom exception classes have expected attributes."""
    exc = NotFoundError("ApiCredential", 7)
    assert exc.status_code == 404
    assert "ApiCredential" in exc.message and "7" in exc.message

    exc = ValidationError("Invalid input", field="master")
    assert exc.status_code == 400
    assert exc.details == {"field": "master"}

    exc = ConfigurationError("missing", config_key="api_key")
    assert exc.status_code == 400
    assert exc.details == {"config_key": "api_key"}

    exc = DocumentError("bad index", index=0)
    assert exc.details == {"index": 0}


def test_rate_limit_is_a_provider_error():
    exc = RateLimitError(provider="openai")
    assert isinstance(exc, ProviderError)
    assert exc.status_code == 429
    assert exc.details == {"provider": "openai"}
    assert ProviderError("boom").status_code == 502


def test_create_error_response_body():
    res = create_error_response("nope", status_code=400, details={"field": "text"})
    assert res.status_code == 400
    assert json.loads(res.body) == {"error": {"message": "nope", "status_code": 400, "details": {"field": "text"}}}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
