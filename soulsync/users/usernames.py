"""Generated display names such as ``StormNova417``."""

from __future__ import annotations

import random
from typing import Callable

PREFIXES = ("Frost", "Shadow", "Ember", "Void", "Storm")
SUFFIXES = ("Vale", "Nova", "Knight", "Hunter", "Strike")

_MAX_ATTEMPTS = 500


def generate_username(rng: random.Random | None = None) -> str:
    """Prefix + suffix + a number in 100..999."""
    rng = rng or random.Random()
    return f"{rng.choice(PREFIXES)}{rng.choice(SUFFIXES)}{rng.randint(100, 999)}"


def unique_username(taken: Callable[[str], bool], rng: random.Random | None = None) -> str:
    """Draw names until one is not *taken*.

    Raises ``RuntimeError`` if no free name turns up after a bounded number
    of draws.
    """
    rng = rng or random.Random()
    for _ in range(_MAX_ATTEMPTS):
        name = generate_username(rng)
        if not taken(name):
            return name
    raise RuntimeError("could not generate a unique username")
