"""
Gateway Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

GEMINI_MODELS = {
    "FLASH_LITE": "gemini-2.5-flash-lite",
    "FLASH": "gemini-2.5-flash",
}


@dataclass(frozen=True)
class Settings:
    """Immutable gateway settings."""

    # --- Credentials ---
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")

    # --- Models ---
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", GEMINI_MODELS["FLASH"])
    GEMINI_FALLBACK_MODEL: str = os.getenv(
        "GEMINI_FALLBACK_MODEL", GEMINI_MODELS["FLASH"]
    )

    # --- Generation defaults ---
    DEFAULT_TEMPERATURE: float = float(os.getenv("GATEWAY_TEMPERATURE", "0.7"))
    DEFAULT_MAX_TOKENS: int = int(os.getenv("GATEWAY_MAX_TOKENS", "100"))

    # --- Remote calls ---
    REQUEST_TIMEOUT: float = float(os.getenv("GATEWAY_REQUEST_TIMEOUT", "60"))


settings = Settings()
