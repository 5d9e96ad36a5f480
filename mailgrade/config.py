"""
mailgrade Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable engine settings."""

    # --- Analysis ---
    DEBOUNCE_MS: int = int(os.getenv("MAILGRADE_DEBOUNCE_MS", "500"))

    # --- Export ---
    EXPORT_INDENT: int = int(os.getenv("MAILGRADE_EXPORT_INDENT", "2"))


settings = Settings()
