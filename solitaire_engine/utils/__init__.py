"""Utility helpers."""

from .history import (
    EmptyHistoryError,
    HistoryError,
    HistoryIndexError,
    HistoryManager,
    HistoryPayloadError,
)
from .rng import create_rng

__all__ = [
    "EmptyHistoryError",
    "HistoryError",
    "HistoryIndexError",
    "HistoryManager",
    "HistoryPayloadError",
    "create_rng",
]
