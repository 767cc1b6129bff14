"""Seeded pseudo-random number stream.

Mulberry32: 32-bit state, a handful of multiply/xor-shift steps per draw.
All arithmetic is masked to 32 bits so the stream is identical on every
platform and for any integer seed, including zero and negatives.
"""

from typing import Callable

MASK32 = 0xFFFFFFFF
INCREMENT = 0x6D2B79F5
TWO_POW_32 = 4294967296


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a * b."""
    return (a * b) & MASK32


def create_rng(seed: int) -> Callable[[], float]:
    """Create a deterministic random stream.

    Args:
        seed: Any integer.

    Returns:
        Function returning floats in [0, 1). Two streams created with the
        same seed yield the same sequence.
    """
    state = seed & MASK32

    def next_float() -> float:
        nonlocal state
        state = (state + INCREMENT) & MASK32
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / TWO_POW_32

    return next_float
