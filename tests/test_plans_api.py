"""Tests for the plan endpoints through the FastAPI app."""

from io import BytesIO

from pypdf import PdfReader

import api.plans
from core.exceptions import RateLimitError
from data.prompts import SAMPLE_PLAN_TEXT
from sample_files import make_pdf, make_png, make_png_header


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


def test_parse_endpoint(client):
    res = client.post("/api/plans/parse", json={"text": SAMPLE_PLAN_TEXT})
    assert res.status_code == 200
    body = res.json()
    assert len(body["meals"]) == 7
    assert body["meals"][2] == {"title": "الغداء", "items": "200جم صدور دجاج + 5 ملاعق أرز + سلطة", "is_notes": False, "icon": "🍽️"}
    assert body["stats"]["calories"] == "2000"


def test_parse_requires_text(client):
    res = client.post("/api/plans/parse", json={})
    assert res.status_code == 422
    assert res.json()["error"]["message"] == "Validation error"


def test_pages_endpoint(client):
    res = client.post("/api/plans/pages", json={"text": SAMPLE_PLAN_TEXT, "before_after": {"client_name": "أحمد"}})
    assert res.status_code == 200
    assert [p["kind"] for p in res.json()] == ["ba-page", "notes-page", "diet-page"]


def test_render_endpoint_returns_html(client):
    res = client.post("/api/plans/render", json={"text": "الغداء أرز"})
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
    assert "meal-card" in res.text


def test_export_merges_pages(client):
    files = [
        ("master", ("Nutrition_Master.pdf", make_pdf(6), "application/pdf")),
        ("pages", ("notes.png", make_png("white"), "image/png")),
        ("pages", ("diet.png", make_png("green"), "image/png")),
    ]
    res = client.post("/api/plans/export", files=files, data={"insert_page": "2"})
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/pdf"
    assert "NutritionPlan_" in res.headers["content-disposition"]
    assert len(PdfReader(BytesIO(res.content)).pages) == 8


def test_export_without_master_is_rejected(client):
    files = [("pages", ("diet.png", make_png(), "image/png"))]
    res = client.post("/api/plans/export", files=files)
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"field": "master"}


def test_export_without_pages_is_rejected(client):
    files = [("master", ("m.pdf", make_pdf(2), "application/pdf"))]
    res = client.post("/api/plans/export", files=files)
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"field": "pages"}


def test_export_offset_past_end(client):
    files = [
        ("master", ("m.pdf", make_pdf(2), "application/pdf")),
        ("pages", ("diet.png", make_png(), "image/png")),
    ]
    res = client.post("/api/plans/export", files=files, data={"insert_page": "5"})
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"index": 5}


def test_generate_with_explicit_key(client, monkeypatch):
    seen = {}

    def fake_generate(api_key, client_data):
        seen["key"] = api_key
        return SAMPLE_PLAN_TEXT

    monkeypatch.setattr(api.plans, "generate_plan_text", fake_generate)
    res = client.post("/api/plans/generate", json={"client_data": "ذكر 30 سنة", "api_key": "sk-inline"})
    assert res.status_code == 200
    assert seen["key"] == "sk-inline"
    assert res.json()["text"] == SAMPLE_PLAN_TEXT
    assert res.json()["plan"]["stats"]["fats"] == "60"


def test_generate_uses_saved_key(client, monkeypatch):
    seen = {}

    def fake_generate(api_key, client_data):
        seen["key"] = api_key
        return "الغداء أرز"

    monkeypatch.setattr(api.plans, "generate_plan_text", fake_generate)
    client.put("/api/settings/api-key", json={"api_key": "pplx-saved"})
    try:
        res = client.post("/api/plans/generate", json={"client_data": "data"})
        assert res.status_code == 200
        assert seen["key"] == "pplx-saved"
    finally:
        client.delete("/api/settings/api-key")


def test_generate_without_any_key(client):
    res = client.post("/api/plans/generate", json={"client_data": "data"})
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"config_key": "api_key"}


def test_generate_surfaces_rate_limit(client, monkeypatch):
    def fake_generate(api_key, client_data):
        raise RateLimitError(provider="gemini:gemini-2.5-flash")

    monkeypatch.setattr(api.plans, "generate_plan_text", fake_generate)
    res = client.post("/api/plans/generate", json={"client_data": "data", "api_key": "AIza"})
    assert res.status_code == 429
    assert "Rate Limit" in res.json()["error"]["message"]


def test_export_oversized_image_is_rejected(client):
    files = [
        ("master", ("m.pdf", make_pdf(6), "application/pdf")),
        ("pages", ("huge.png", make_png_header(30000, 30000), "image/png")),
    ]
    res = client.post("/api/plans/export", files=files)
    assert res.status_code == 400
    assert "Unreadable page image" in res.json()["error"]["message"]


def test_export_insert_page_zero_uses_default(client):
    files = [
        ("master", ("m.pdf", make_pdf(6), "application/pdf")),
        ("pages", ("diet.png", make_png(), "image/png")),
    ]
    res = client.post("/api/plans/export", files=files, data={"insert_page": "0"})
    assert res.status_code == 200
    widths = [float(p.mediabox.width) for p in PdfReader(BytesIO(res.content)).pages]
    assert [i for i, w in enumerate(widths) if w < 600] == [5]


def test_export_negative_insert_page_is_rejected(client):
    files = [
        ("master", ("m.pdf", make_pdf(6), "application/pdf")),
        ("pages", ("diet.png", make_png(), "image/png")),
    ]
    res = client.post("/api/plans/export", files=files, data={"insert_page": "-1"})
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"field": "insert_page"}
