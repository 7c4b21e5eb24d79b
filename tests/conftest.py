import json
import logging

import pytest


@pytest.fixture
def write_json(tmp_path):
    """Write a payload to a JSON file under tmp_path and return its path."""

    def _write(payload, name="products.json"):
        path = tmp_path / name
        if isinstance(payload, (bytes, str)):
            data = payload if isinstance(payload, bytes) else payload.encode("utf-8")
            path.write_bytes(data)
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def sample_products():
    return [
        {"product_title": "Chobani Plain Yogurt", "is_plain_yogurt": True, "confidence": 0.9, "is_nonfat": False},
        {"product_title": "Coconut Yogurt Alternative", "is_plain_yogurt": True, "confidence": 0.4, "is_nonfat": False},
        {"product_title": "Siggi's Skyr", "is_plain_yogurt": False, "confidence": 0.75, "is_nonfat": True},
        {"product_title": "Organic Whole Milk", "is_plain_yogurt": False, "confidence": 0.1, "is_nonfat": False},
    ]


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Undo logging configuration done by the CLI between tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers and type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
