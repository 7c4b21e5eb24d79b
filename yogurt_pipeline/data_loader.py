"""
Data Loader Module

Functions for loading product records into the pipeline from JSON files.
"""

import json
import logging
import math
import re
from typing import Any, Dict, List

from yogurt_pipeline.config_models import Product
from yogurt_pipeline.exceptions import DecodeError, InputReadError


logger = logging.getLogger(__name__)


# Field name -> accepted JSON value type
PRODUCT_FIELDS = {
    'product_title': 'string',
    'is_plain_yogurt': 'bool',
    'confidence': 'number',
    'is_nonfat': 'bool',
}

# Unpaired UTF-16 surrogates left by escapes such as "\ud800"
LONE_SURROGATE = re.compile('[\ud800-\udfff]')


def read_input_file(input_path: str) -> bytes:
    """
    Read the entire input file into memory.

    Parameters:
    -----------
    input_path : str
        Path to the JSON file with product records

    Returns:
    --------
    bytes
        Raw file contents

    Raises:
    -------
    InputReadError
        If the file is missing or cannot be read
    """
    try:
        with open(input_path, 'rb') as handle:
            data = handle.read()
    except OSError as e:
        raise InputReadError(e) from e

    logger.info(f"Read {len(data)} bytes from {input_path}")
    return data


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON number literal {name!r}")


def _coerce_field(name: str, value: Any, index: int) -> Any:
    """Check a single field value against the type its field accepts."""
    kind = PRODUCT_FIELDS[name]

    if kind == 'string':
        if not isinstance(value, str):
            raise DecodeError(
                f"element {index}: field '{name}' must be a string, got {type(value).__name__}"
            )
        return LONE_SURROGATE.sub('\ufffd', value)

    if kind == 'bool':
        if not isinstance(value, bool):
            raise DecodeError(
                f"element {index}: field '{name}' must be a boolean, got {type(value).__name__}"
            )
        return value

    # bool is a subclass of int and must not pass as a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(
            f"element {index}: field '{name}' must be a number, got {type(value).__name__}"
        )
    try:
        finite = math.isfinite(float(value))
    except OverflowError:
        finite = False
    if not finite:
        raise DecodeError(f"element {index}: field '{name}' is out of range: {value}")
    return value


def _product_from_raw(raw: Any, index: int) -> Product:
    if raw is None:
        return Product()
    if not isinstance(raw, dict):
        raise DecodeError(
            f"element {index}: expected an object, got {type(raw).__name__}"
        )

    values: Dict[str, Any] = {}
    for key, value in raw.items():
        name = key.lower()
        if name not in PRODUCT_FIELDS:
            continue
        # null leaves the field at its zero value
        if value is None:
            continue
        values[name] = _coerce_field(name, value, index)

    return Product(**values)


def decode_products(data: bytes) -> List[Product]:
    """
    Decode raw bytes into an ordered list of Product records.

    The payload must be a JSON array; ``null`` reads as an empty one. Object
    keys are matched to field names case-insensitively and unknown keys are
    ignored. A ``null`` element or field value yields the zero value.

    Parameters:
    -----------
    data : bytes
        Raw JSON payload

    Returns:
    --------
    List[Product]
        One Product per array element, in input order

    Raises:
    -------
    DecodeError
        If the payload is not valid JSON or does not match the record shape
    """
    text = data.decode('utf-8', errors='replace')
    try:
        raw = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise DecodeError(e) from e

    # a top-level null decodes to no products
    if raw is None:
        raw = []
    if not isinstance(raw, list):
        raise DecodeError(f"expected a JSON array of products, got {type(raw).__name__}")

    return [_product_from_raw(item, index) for index, item in enumerate(raw)]


def load_products(input_path: str) -> List[Product]:
    """
    Load product records from a JSON file.

    Parameters:
    -----------
    input_path : str
        Path to the JSON file

    Returns:
    --------
    List[Product]
        Decoded products, in file order

    Required Keys per Object:
    -------------------------
    - product_title: Product title (string, primary field for classification)
    - is_plain_yogurt: Upstream plain-yogurt flag (boolean)
    - confidence: Upstream confidence score (number)
    - is_nonfat: Upstream nonfat flag (boolean)

    Missing keys take their zero value; extra keys are ignored.
    """
    data = read_input_file(input_path)
    products = decode_products(data)
    logger.info(f"Decoded {len(products)} products from {input_path}")
    return products
