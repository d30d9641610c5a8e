"""
Helpers for turning keyword arguments into request parameters.
"""

from collections.abc import Iterable, Mapping
from typing import Any


def is_absent(value: Any) -> bool:
    """``None`` and ``False`` mark a parameter that must not be sent."""
    return value is None or value is False


def format_param(value: Any) -> str:
    if value is True:
        return "true"
    return str(value)


def build_params(**kwargs: Any) -> dict[str, Any]:
    """Keep keyword arguments in order, dropping absent values."""
    return {key: value for key, value in kwargs.items() if not is_absent(value)}


def encode_items(params: Mapping[str, Any]) -> Iterable[tuple[str, str]]:
    for key, value in params.items():
        if is_absent(value):
            continue
        yield key, format_param(value)
