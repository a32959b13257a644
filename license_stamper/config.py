# license_stamper/config.py
from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

DEFAULT_FOOTER_OPACITY = 0.6
DEFAULT_DIAGONAL_ANGLE = 35.0
DEFAULT_MAX_UPLOAD_MB = 10


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}")


def _env_csv(name: str, default: str) -> Tuple[str, ...]:
    raw = os.getenv(name) or default
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class StamperSettings:
    """
    Process-wide tunables. Built once at startup (see get_settings) and passed
    into stamp_pdf explicitly, so tests can hand in their own instance.
    """
    footer_opacity: float = DEFAULT_FOOTER_OPACITY
    diagonal_angle: float = DEFAULT_DIAGONAL_ANGLE  # degrees, counter-clockwise
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024
    cors_origins: Tuple[str, ...] = ("*",)

    def __post_init__(self) -> None:
        if not (0.0 < self.footer_opacity <= 1.0):
            raise RuntimeError(
                f"FOOTER_OPACITY must be in (0, 1], got {self.footer_opacity}"
            )
        if not math.isfinite(self.diagonal_angle):
            raise RuntimeError(
                f"DIAGONAL_ANGLE must be a finite number, got {self.diagonal_angle}"
            )
        if self.max_upload_bytes <= 0:
            raise RuntimeError("MAX_UPLOAD_MB must be positive")

    @classmethod
    def from_env(cls) -> "StamperSettings":
        # Local dev convenience: loads from .env if present.
        load_dotenv()

        max_mb = _env_float("MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_MB)
        return cls(
            footer_opacity=_env_float("FOOTER_OPACITY", DEFAULT_FOOTER_OPACITY),
            diagonal_angle=_env_float("DIAGONAL_ANGLE", DEFAULT_DIAGONAL_ANGLE),
            max_upload_bytes=int(max_mb * 1024 * 1024),
            cors_origins=_env_csv("CORS_ORIGINS", "*"),
        )


_settings_singleton: StamperSettings | None = None


def get_settings() -> StamperSettings:
    global _settings_singleton
    if _settings_singleton is None:
        _settings_singleton = StamperSettings.from_env()
    return _settings_singleton


def reset_settings() -> None:
    """Forget the cached settings (tests only)."""
    global _settings_singleton
    _settings_singleton = None
