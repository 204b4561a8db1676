"""Deterministic random number generation for Stellarion.

Every battle draws from a single ``random.Random`` instance seeded from game
state (turn, subject, context) so that:
- Reproducibility: the same seed always resolves the same battle
- Replay: recorded combat reports can be regenerated byte for byte
- Testability: callers may inject their own generator

Examples:
    >>> seed = generate_seed(turn=12, subject=7, context="combat")
    >>> seed
    '12:7:combat'
    >>> rng = make_rng(seed)
    >>> chance(rng, 1.0)
    True
"""

import hashlib
import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def generate_seed(turn: int, subject: int, context: str) -> str:
    """Generate a deterministic seed from game state.

    Format: "turn:subject:context"

    Args:
        turn: Turn being resolved
        subject: Identifier of the thing the roll is for (usually a mission id)
        context: What the roll is for (e.g., 'combat', 'api:replay')

    Returns:
        Seed string in format "turn:subject:context"

    Examples:
        >>> generate_seed(3, 42, "combat")
        '3:42:combat'

    Raises:
        ValueError: If turn or subject is negative
    """
    if turn < 0:
        raise ValueError(f"turn must be non-negative, got {turn}")
    if subject < 0:
        raise ValueError(f"subject must be non-negative, got {subject}")

    return f"{turn}:{subject}:{context}"


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random().

    Args:
        seed: Seed string

    Returns:
        64-bit integer derived from SHA-256(seed)
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    # Use first 8 bytes for a 64-bit integer
    return int.from_bytes(digest[:8], "big", signed=False)


def make_rng(seed: str) -> random.Random:
    """Return a generator seeded from ``seed``.

    Examples:
        >>> make_rng("1:1:combat").random() == make_rng("1:1:combat").random()
        True
    """
    return random.Random(_seed_to_int(seed))


def chance(rng: random.Random, probability: float) -> bool:
    """Draw once from ``rng`` and report whether the event happens.

    A draw is consumed even for probabilities of 0 and 1 so that the
    sequence of draws does not depend on configured odds.

    Raises:
        ValueError: If probability not in [0.0, 1.0]
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be between 0.0 and 1.0, got {probability}")

    return rng.random() < probability


def choose(rng: random.Random, options: Sequence[T]) -> T | None:
    """Choose uniformly among ``options``; ``None`` when there is nothing to pick."""
    if not options:
        return None
    return rng.choice(options)
