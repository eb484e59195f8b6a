"""Schemas for the saved AI credential."""

from pydantic import BaseModel, Field
from typing import Optional


class ApiKeyRequest(BaseModel):
    api_key: str = Field(..., min_length=1, examples=["sk-..."], description="OpenAI (sk-), Perplexity (pplx-) or Gemini key")


class ApiKeyStatus(BaseModel):
    """Credential status; the key itself is only returned masked."""

    configured: bool
    provider: Optional[str] = None
    masked_key: Optional[str] = None
    updated_at: Optional[str] = None
