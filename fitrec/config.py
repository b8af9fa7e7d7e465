from __future__ import annotations

import os
from typing import List


class Settings:
    """Centralized configuration for the recommendation core and its HTTP surface."""

    def __init__(self) -> None:
        self.log_level: str = (os.environ.get("FITREC_LOG_LEVEL") or "INFO").strip().upper()
        # Default strict flag for profile validation requests that do not set one.
        self.strict_validation: bool = (os.environ.get("FITREC_STRICT_VALIDATION") or "").strip() in {
            "1",
            "true",
            "True",
        }
        self.max_goals: int = int(os.environ.get("FITREC_MAX_GOALS") or "3")

        cors = os.environ.get("FITREC_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
