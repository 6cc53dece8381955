"""Translation backend package: async HTTP interface to the LLM API.

RULES:
- All backend HTTP calls go through TranslationClient (no direct httpx usage elsewhere)
- Authentication is via Bearer token from config
"""

from design_translator.api.client import TranslationAPIError, TranslationClient

__all__ = ["TranslationAPIError", "TranslationClient"]
