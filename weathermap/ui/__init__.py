"""Expose dashboard card render functions."""

from .card_map import card_map
from .card_regions import card_regions
from .card_timeline import card_timeline

__all__ = [
    "card_map",
    "card_regions",
    "card_timeline",
]
