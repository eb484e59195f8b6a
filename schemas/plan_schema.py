"""Schemas for parsed diet plans and the plan endpoints."""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class MealEntry(BaseModel):
    """One titled section of a diet plan."""

    title: str = Field(..., examples=["الغداء"], description="Recognized meal-title keyword")
    items: str = Field("", examples=["200جم صدور دجاج<br>سلطة"], description="Section content, lines joined with <br>")
    is_notes: bool = Field(False, description="True when the section holds general notes")
    icon: str = Field(..., examples=["🍽️"])


class ParseResult(BaseModel):
    """Ordered meal sections plus the macro totals found in the text.

    `stats` only holds keys that were actually found; missing ones are
    filled in by the renderer.
    """

    meals: List[MealEntry] = []
    stats: Dict[str, str] = {}


class PlanTextRequest(BaseModel):
    text: str = Field(..., examples=["الغداء 200جم صدور دجاج\nسعرات\n2000"], description="Free-form plan text")


class BeforeAfterData(BaseModel):
    """Optional before/after comparison page shown first in the output."""

    client_name: Optional[str] = Field(None, examples=["أحمد"])
    before_image: Optional[str] = Field(None, description="Image as a data URL")
    after_image: Optional[str] = Field(None, description="Image as a data URL")
    before_text: Optional[str] = Field("Before")
    after_text: Optional[str] = Field("After")
    notes: Optional[str] = None


class RenderRequest(PlanTextRequest):
    before_after: Optional[BeforeAfterData] = None
    background_url: Optional[str] = Field(None, description="Page background image URL or data URL")


class RenderedPage(BaseModel):
    """One printable page; `kind` is its CSS class (notes-page, diet-page, ba-page)."""

    kind: str = Field(..., examples=["diet-page"])
    html: str


class GenerateRequest(BaseModel):
    client_data: str = Field(..., examples=["ذكر، 30 سنة، 85 كجم، الهدف تنشيف"], description="Client details for the AI provider")
    api_key: Optional[str] = Field(None, description="Overrides the saved credential for this call")


class GenerateResponse(BaseModel):
    text: str
    plan: ParseResult
