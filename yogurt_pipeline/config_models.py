"""Shared record and settings models for the yogurt pipeline.

These helpers provide a single place where input products, transformed
products and runtime settings are defined, so that the loader, classifier,
writer and helper utilities all share identical structures.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional


# ---------------------------------------------------------------------------
# Product records
# ---------------------------------------------------------------------------


# Output keys, in the order they are serialized.
OUTPUT_FIELDS = ("product_title", "is_yogurt", "is_plain", "is_nonfat", "confidence")


@dataclass(frozen=True)
class Product:
    product_title: str = ""
    is_plain_yogurt: bool = False
    confidence: float = 0
    is_nonfat: bool = False


@dataclass(frozen=True)
class TransformedProduct:
    product_title: str
    is_yogurt: bool
    is_plain: bool
    is_nonfat: bool
    confidence: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "product_title": self.product_title,
            "is_yogurt": self.is_yogurt,
            "is_plain": self.is_plain,
            "is_nonfat": self.is_nonfat,
            "confidence": self.confidence,
        }


@dataclass
class TransformResult:
    products: List[TransformedProduct] = field(default_factory=list)
    yogurt_count: int = 0
    plain_count: int = 0

    @property
    def total_count(self) -> int:
        return len(self.products)

    def to_records(self) -> List[Dict[str, object]]:
        """Return the products as plain dicts in output key order."""
        return [product.to_dict() for product in self.products]


# ---------------------------------------------------------------------------
# Runtime settings
# ---------------------------------------------------------------------------


TRUTHY_STRINGS = {"1", "true", "yes", "on"}

ENV_LOG_LEVEL = "YOGURT_PIPELINE_LOG_LEVEL"
ENV_LOG_FILE = "YOGURT_PIPELINE_LOG_FILE"
ENV_PROGRESS = "YOGURT_PIPELINE_PROGRESS"


@dataclass
class PipelineSettings:
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    show_progress: bool = False

    def numeric_log_level(self) -> int:
        level = logging.getLevelName(self.log_level.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> PipelineSettings:
    """Build settings from environment variables (``.env`` already loaded)."""
    env = os.environ if environ is None else environ

    log_level = (env.get(ENV_LOG_LEVEL) or "").strip() or "WARNING"
    log_file = (env.get(ENV_LOG_FILE) or "").strip() or None
    show_progress = (env.get(ENV_PROGRESS) or "").strip().lower() in TRUTHY_STRINGS

    return PipelineSettings(
        log_level=log_level.upper(),
        log_file=log_file,
        show_progress=show_progress,
    )


# Convenience helpers -------------------------------------------------------


def ensure_output_dir(path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
