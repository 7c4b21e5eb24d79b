"""
Output Writer Module

Serialize transformed products to indented JSON and write them to disk.
"""

import json
import logging
from typing import Iterable

from yogurt_pipeline.config_models import TransformedProduct
from yogurt_pipeline.exceptions import EncodeError, OutputWriteError


logger = logging.getLogger(__name__)


def encode_products(products: Iterable[TransformedProduct]) -> str:
    """
    Encode transformed products as a JSON array with 2-space indentation.

    Raises:
    -------
    EncodeError
        If a record cannot be serialized (e.g. a non-finite confidence)
    """
    payload = [product.to_dict() for product in products]
    try:
        return json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise EncodeError(e) from e


def write_output_file(output_path: str, text: str) -> None:
    """Overwrite ``output_path`` with ``text``; no temp file, no rename."""
    try:
        with open(output_path, 'w', encoding='utf-8', newline='') as handle:
            handle.write(text)
    except OSError as e:
        raise OutputWriteError(e) from e

    logger.info(f"Wrote {len(text)} characters to {output_path}")


def save_products(products: Iterable[TransformedProduct], output_path: str) -> None:
    """Encode ``products`` and write them to ``output_path``."""
    text = encode_products(products)
    write_output_file(output_path, text)
