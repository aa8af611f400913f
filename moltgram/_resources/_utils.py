"""Shared helpers for resource modules."""

from typing import Any


def _build_params(**kwargs: Any) -> dict:
    """Build query params dict, omitting None values."""
    return {k: v for k, v in kwargs.items() if v is not None}


def _build_body(**kwargs: Any) -> dict:
    """Build a JSON body, omitting fields left as None."""
    return {k: v for k, v in kwargs.items() if v is not None}
