"""Diet plan endpoints: parse, render, export and AI generation."""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.orm import Session

from core.config import DEFAULT_INSERT_PAGE
from core.exceptions import ConfigurationError, ValidationError
from core.logger import get_logger
from database.deps import get_db_read
from schemas.plan_schema import (
    GenerateRequest,
    GenerateResponse,
    ParseResult,
    PlanTextRequest,
    RenderedPage,
    RenderRequest,
)
from services.ai_provider import generate_plan_text
from services.diet_parser import diet_parser
from services.document_compositor import build_export_filename, compose_plan_document
from services.plan_renderer import plan_renderer
from api.settings import get_saved_api_key

logger = get_logger("api.plans")
router = APIRouter(prefix="/api/plans", tags=["plans"])


@router.post("/parse", response_model=ParseResult)
def parse_plan(request: PlanTextRequest = Body(...)):
    """Parse free-form plan text into meal sections and macro totals."""
    return diet_parser.parse(request.text)


@router.post("/pages", response_model=List[RenderedPage])
def render_plan_pages(request: RenderRequest = Body(...)):
    """Return the individual page fragments, e.g. for client-side rasterizing."""
    result = diet_parser.parse(request.text)
    return plan_renderer.render_pages(result, request.before_after)


@router.post("/render", response_class=HTMLResponse)
def render_plan(request: RenderRequest = Body(...)):
    """Render the plan as a standalone, print-ready HTML document."""
    result = diet_parser.parse(request.text)
    pages = plan_renderer.render_pages(result, request.before_after)
    return HTMLResponse(plan_renderer.render_document(pages, request.background_url))


def _read_upload(upload: Optional[UploadFile]) -> Optional[bytes]:
    if upload is None:
        return None
    content = upload.file.read()
    return content or None


@router.post("/export")
def export_plan(
    master: Optional[UploadFile] = File(None),
    pages: Optional[List[UploadFile]] = File(None),
    before_after: Optional[UploadFile] = File(None),
    insert_page: int = Form(DEFAULT_INSERT_PAGE),
):
    """Merge rasterized plan pages into the uploaded master PDF.

    Nothing is produced unless the master PDF and at least one page are
    present.

    Raises:
        ValidationError: If the master PDF or the pages are missing.
        DocumentError: If a file cannot be read or an index is out of range.
    """
    master_bytes = _read_upload(master)
    if not master_bytes:
        raise ValidationError("❌ يجب اختيار ملف PDF الرئيسي أولاً!", field="master")

    page_images = [b for b in (_read_upload(p) for p in (pages or [])) if b]
    ba_image = _read_upload(before_after)
    if not page_images and ba_image is None:
        raise ValidationError("❌ لا توجد صفحات لدمجها!", field="pages")
    if insert_page == 0:
        insert_page = DEFAULT_INSERT_PAGE
    if insert_page < 0:
        raise ValidationError("insert_page must be positive", field="insert_page")

    merged = compose_plan_document(master_bytes, page_images, before_after=ba_image, insert_after=insert_page)
    filename = build_export_filename()
    logger.info("Exported %s with %d pages", filename, len(page_images) + (1 if ba_image else 0))
    return Response(
        content=merged,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/generate", response_model=GenerateResponse)
def generate_plan(request: GenerateRequest = Body(...), db: Session = Depends(get_db_read)):
    """Generate plan text with the AI provider and parse it.

    Uses `api_key` from the request when given, otherwise the saved one.

    Raises:
        ConfigurationError: If no credential is available.
        ProviderError: If the provider fails; its message is passed through.
    """
    api_key = (request.api_key or "").strip() or get_saved_api_key(db)
    if not api_key:
        raise ConfigurationError("⚠️ الرجاء إدخال مفتاح API أولاً", config_key="api_key")
    text = generate_plan_text(api_key, request.client_data)
    return GenerateResponse(text=text, plan=diet_parser.parse(text))
