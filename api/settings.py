"""Settings endpoints for the saved AI credential.

The key is stored once and reused by `/api/plans/generate`; responses only
ever show it masked.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.logger import get_logger
from core.exceptions import NotFoundError, ValidationError
from core.repository import BaseRepository
from database import models
from database.deps import get_db_read, get_db_write
from schemas.settings_schema import ApiKeyRequest, ApiKeyStatus
from services.ai_provider import detect_provider

logger = get_logger("api.settings")
router = APIRouter(prefix="/api/settings", tags=["settings"])


def mask_key(api_key: str) -> str:
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return f"{api_key[:4]}...{api_key[-4:]}"


def get_saved_api_key(db: Session) -> Optional[str]:
    """Return the stored credential, or None when none was saved."""
    cred = BaseRepository(models.ApiCredential, db).first()
    return cred.api_key if cred else None


def _status(cred: Optional[models.ApiCredential]) -> ApiKeyStatus:
    if cred is None:
        return ApiKeyStatus(configured=False)
    return ApiKeyStatus(
        configured=True,
        provider=detect_provider(cred.api_key),
        masked_key=mask_key(cred.api_key),
        updated_at=cred.updated_at.isoformat() if cred.updated_at else None,
    )


@router.get("/api-key", response_model=ApiKeyStatus)
def get_api_key_status(db: Session = Depends(get_db_read)):
    return _status(BaseRepository(models.ApiCredential, db).first())


@router.put("/api-key", response_model=ApiKeyStatus)
def save_api_key(payload: ApiKeyRequest, db: Session = Depends(get_db_write)):
    """Store the credential, replacing any previously saved one."""
    repo = BaseRepository(models.ApiCredential, db)
    key = payload.api_key.strip()
    if not key:
        raise ValidationError("API key must not be blank", field="api_key")
    cred = repo.first()
    if cred is None:
        cred = repo.create(models.ApiCredential(api_key=key))
    else:
        cred.api_key = key
        cred = repo.update(cred)
    logger.info("API key saved for provider %s", detect_provider(key))
    return _status(cred)


@router.delete("/api-key", response_model=ApiKeyStatus)
def delete_api_key(db: Session = Depends(get_db_write)):
    """Forget the stored credential.

    Raises:
        NotFoundError: If no credential was saved.
    """
    repo = BaseRepository(models.ApiCredential, db)
    cred = repo.first()
    if cred is None:
        raise NotFoundError("ApiCredential")
    repo.delete(cred)
    logger.info("API key removed")
    return _status(None)
