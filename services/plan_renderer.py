"""HTML rendering of parsed diet plans.

Produces print-ready A4 page fragments from a `ParseResult`:

- one notes page per notes section that has content,
- one diet page with a card per regular meal and the macro summary,
- optionally a before/after comparison page placed first.

User text is HTML-escaped; the parser's `<br>` line marker is kept as a line
break.
"""

from html import escape
from typing import List, Optional, Tuple
from urllib.parse import quote

from core.logger import get_logger
from data.keywords import MACRO_SUMMARY
from schemas.plan_schema import BeforeAfterData, MealEntry, ParseResult, RenderedPage
from services.diet_parser import LINE_BREAK

logger = get_logger("services.plan_renderer")

NOTES_HEADING = "ملاحظات عامة 📝"
DIET_HEADING = "🍎 النظام الغذائي"
DIET_SUBHEADING = "Your Daily Nutrition Plan"
CLIENT_NAME_PLACEHOLDER = "اسم العميل"
BEFORE_AFTER_NOTES_HEADING = "ملاحظات"
# Characters left as-is when a background URL is embedded in CSS
URL_SAFE_CHARS = ":/;,=+?&%#.-_~@"

PAGE_CSS = """
@page { size: A4; margin: 0; }
body { margin: 0; font-family: 'Cairo', 'Tahoma', sans-serif; direction: rtl; }
.page { width: 210mm; height: 297mm; box-sizing: border-box; padding: 20mm 15mm;
        page-break-after: always; background-size: 100% 100%; overflow: hidden; }
.meal-card { border-radius: 12px; padding: 8px 14px; margin-bottom: 10px; background: rgba(255,255,255,0.85); }
.macros-container { display: flex; justify-content: space-between; gap: 8px; margin-top: 12px; }
.macro-stat { flex: 1; text-align: center; border-radius: 10px; padding: 8px; background: rgba(0,0,0,0.06); }
.macro-stat .value { display: block; font-size: 1.6em; font-weight: bold; }
.ba-images-row { display: flex; gap: 12px; justify-content: center; }
.ba-image-box img, .ba-placeholder { width: 80mm; height: 120mm; object-fit: cover; border-radius: 10px; }
.ba-placeholder { display: flex; align-items: center; justify-content: center; background: #ddd; }
"""


def format_items(items: str) -> str:
    """Escape section content and turn line markers into `<br>` tags."""
    lines = items.replace("\n", LINE_BREAK).split(LINE_BREAK)
    return LINE_BREAK.join(escape(line) for line in lines)


def split_meals(result: ParseResult) -> Tuple[List[MealEntry], List[MealEntry]]:
    """Split meals into (notes, regular), keeping the input order of each group."""
    notes = [m for m in result.meals if m.is_notes]
    regular = [m for m in result.meals if not m.is_notes]
    return notes, regular


def stat_value(result: ParseResult, key: str) -> str:
    return result.stats.get(key) or "0"


class PlanRenderer:
    """Builds page fragments and full HTML documents for a parsed plan."""

    def render_notes_page(self, notes: MealEntry) -> RenderedPage:
        html = (
            f'<div class="page notes-page">'
            f"<h1>{NOTES_HEADING}</h1>"
            f'<div class="notes-content">{format_items(notes.items)}</div>'
            f"</div>"
        )
        return RenderedPage(kind="notes-page", html=html)

    def render_meal_card(self, meal: MealEntry) -> str:
        return (
            f'<div class="meal-card">'
            f"<h4>{meal.icon} {escape(meal.title)}</h4>"
            f'<div class="meal-content">{format_items(meal.items)}</div>'
            f"</div>"
        )

    def render_macros(self, result: ParseResult) -> str:
        """Render the four macro totals in fixed order, missing ones as 0."""
        stats = "".join(
            f'<div class="macro-stat {key}">'
            f'<span class="label">{label}</span>'
            f'<span class="value">{escape(stat_value(result, key))}</span>'
            f'<span class="unit">{unit}</span>'
            f"</div>"
            for key, label, unit in MACRO_SUMMARY
        )
        return f'<div class="macros-container">{stats}</div>'

    def render_diet_page(self, regular: List[MealEntry], result: ParseResult) -> RenderedPage:
        meals_html = "".join(self.render_meal_card(m) for m in regular)
        html = (
            f'<div class="page diet-page">'
            f'<div class="diet-header"><h2>{DIET_HEADING}</h2><h3>{DIET_SUBHEADING}</h3></div>'
            f'<div class="meals-container">{meals_html}</div>'
            f"{self.render_macros(result)}"
            f"</div>"
        )
        return RenderedPage(kind="diet-page", html=html)

    def render_before_after_page(self, data: BeforeAfterData) -> RenderedPage:
        """Render the before/after comparison page.

        After is shown on the right-hand side of the RTL row, matching the
        printed layout of the master document.
        """
        def image_box(url: Optional[str], placeholder: str, caption: str, css: str) -> str:
            if url:
                media = f'<img src="{escape(url, quote=True)}" alt="{placeholder}">'
            else:
                media = f'<div class="ba-placeholder">{placeholder}</div>'
            return f'<div class="ba-image-box">{media}<p class="ba-label {css}">{escape(caption)}</p></div>'

        notes_html = ""
        if data.notes:
            notes_html = (
                f'<div class="ba-notes-section"><h3>{BEFORE_AFTER_NOTES_HEADING}</h3>'
                f'<div class="ba-notes-box">{format_items(data.notes)}</div></div>'
            )
        html = (
            f'<div class="page ba-page"><div class="ba-content">'
            f'<h2 class="ba-client-name">{escape(data.client_name or CLIENT_NAME_PLACEHOLDER)}</h2>'
            f'<div class="ba-images-row">'
            f'{image_box(data.after_image, "After", data.after_text or "After", "ba-after")}'
            f'{image_box(data.before_image, "Before", data.before_text or "Before", "ba-before")}'
            f"</div>{notes_html}</div></div>"
        )
        return RenderedPage(kind="ba-page", html=html)

    def render_pages(self, result: ParseResult, before_after: Optional[BeforeAfterData] = None) -> List[RenderedPage]:
        """Render all pages for a plan in print order.

        Args:
            result: Parsed plan.
            before_after: Optional comparison page data, rendered first.

        Returns:
            List of pages; empty when the plan has no content at all.
        """
        pages: List[RenderedPage] = []
        if before_after is not None:
            pages.append(self.render_before_after_page(before_after))

        notes, regular = split_meals(result)
        for entry in notes:
            if entry.items.strip():
                pages.append(self.render_notes_page(entry))

        if regular or result.stats:
            pages.append(self.render_diet_page(regular, result))

        logger.info("Rendered %d pages (%d notes, %d meals)", len(pages), len(notes), len(regular))
        return pages

    def render_document(self, pages: List[RenderedPage], background_url: Optional[str] = None) -> str:
        """Wrap page fragments in a standalone RTL HTML document."""
        css = PAGE_CSS
        if background_url:
            safe_url = quote(background_url, safe=URL_SAFE_CHARS)
            css += f'.page {{ background-image: url("{safe_url}"); }}\n'
        body = "\n".join(p.html for p in pages)
        return (
            '<!DOCTYPE html>\n<html lang="ar" dir="rtl">\n<head>\n<meta charset="utf-8">\n'
            f"<title>Nutrition Plan</title>\n<style>{css}</style>\n</head>\n"
            f'<body>\n<div id="output">\n{body}\n</div>\n</body>\n</html>\n'
        )


plan_renderer = PlanRenderer()
__all__ = ["PlanRenderer", "plan_renderer", "split_meals", "format_items", "stat_value"]
