"""Environment-driven settings for the nutrition plan service."""

import os

# Export / compositing
DEFAULT_INSERT_PAGE = int(os.getenv("DEFAULT_INSERT_PAGE", "5"))
BEFORE_AFTER_INSERT_INDEX = 1
A4_WIDTH = 595.28
A4_HEIGHT = 841.89
JPEG_QUALITY = 85
EXPORT_FILENAME_PREFIX = "NutritionPlan"

# AI providers
AI_HTTP_TIMEOUT = float(os.getenv("AI_HTTP_TIMEOUT", "60"))
OPENAI_API_URL = os.getenv("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions")
PERPLEXITY_API_URL = os.getenv("PERPLEXITY_API_URL", "https://api.perplexity.ai/chat/completions")
GEMINI_API_URL = os.getenv("GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta/models")

OPENAI_MODEL = "gpt-4o-mini"
PERPLEXITY_MODEL = "llama-3.1-sonar-large-128k-online"
# Tried in order until one answers
GEMINI_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-flash-latest",
    "gemini-2.0-flash",
]

CORS_ALLOW_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
