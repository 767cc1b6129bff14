"""Deterministic solitaire rule engine (FreeCell and Klondike)."""

__version__ = "0.1.0"
