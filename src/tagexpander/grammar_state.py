# -------------------------------------
# grammar shared state
# -------------------------------------
"""
Shared state for the grammar engine:
- RNG: single source of randomness for rule selection
- DEFAULT_FALLOFF: selection skew used when a rule set does not set one
- MAX_DEPTH: expansion depth ceiling used when a grammar does not set one
"""
import random
import secrets
import sys


# ============================================================
# Defaults
# ============================================================

DEFAULT_FALLOFF: float = 1.0

# tags nested deeper than this are not resolved
MAX_DEPTH: int = 64


# python frames one expansion level can take: a tag whose rule is chosen by
# a condition or a subgrammar, or whose push expands another tag
FRAMES_PER_LEVEL: int = 10

# frames left for the caller, modifiers and the scanner
_FRAME_RESERVE: int = 100


def check_max_depth(depth: int) -> int:
    """Return depth as an int, or raise ValueError if it is below 1."""
    if int(depth) < 1:
        raise ValueError(f"max depth must be >= 1, got {depth!r}")
    return int(depth)


def clamp_max_depth(depth: int) -> int:
    """Lower a depth ceiling so it is reached before the interpreter recursion limit."""
    limit = (sys.getrecursionlimit() - _FRAME_RESERVE) // FRAMES_PER_LEVEL
    return max(1, min(int(depth), limit))


def set_max_depth(depth: int) -> None:
    """Set the default expansion depth ceiling."""
    global MAX_DEPTH
    MAX_DEPTH = check_max_depth(depth)


def get_max_depth() -> int:
    """Return the default expansion depth ceiling."""
    return MAX_DEPTH


# ============================================================
# Random number generator
# ============================================================

_DEFAULT_SEED = secrets.randbits(128)
RNG = random.Random(_DEFAULT_SEED)


def seed(x: int | str | None = None) -> int:
    """
    Set the random seed for rule selection.

    Args:
        x: Seed value. If None or "auto"/"rand"/"random"/"entropy",
           reseeds from OS entropy. Otherwise uses int(x).

    Returns:
        The seed that was used.
    """
    if x is None or str(x).lower() in ("auto", "rand", "random", "entropy"):
        s = secrets.randbits(128)
    else:
        s = int(x)
    RNG.seed(s)
    return s


def get_rng() -> random.Random:
    """Return the RNG instance."""
    return RNG
