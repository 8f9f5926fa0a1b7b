"""
- HTTP call with clear fallback
Draw the opponent's secret: 3 unique digits, every ordering equally likely.

random.org's "sequences" endpoint returns a random permutation of 0..9, so
its first 3 values are a uniform draw without replacement. If anything goes
wrong (no internet, timeout, bad response) we fall back to a local partial
Fisher-Yates shuffle so the game still works.
"""

import logging
from secrets import randbelow as secure_randbelow
from typing import Callable, Optional

import requests

from . import config
from .config import CODE_LENGTH, DIGITS
from .types import Code

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/sequences/"


def _check_length(length: int) -> None:
    if length < 1 or length > len(DIGITS):
        raise ValueError(f"length must be between 1 and {len(DIGITS)}.")


def draw_code(length: int = CODE_LENGTH, randbelow: Callable[[int], int] = secure_randbelow) -> Code:
    """
    Partial Fisher-Yates over the 10 digits: only the first `length`
    slots get shuffled, so cost is bounded by `length` draws.
    """
    _check_length(length)

    digits = list(DIGITS)
    for i in range(length):
        # pick from the not-yet-placed tail digits[i:]
        j = i + randbelow(len(digits) - i)
        digits[i], digits[j] = digits[j], digits[i]
    return "".join(digits[:length])


def _fetch_permutation(timeout_seconds: float) -> list[int]:
    params = {
        "min": 0,          # smallest value in the sequence
        "max": 9,          # largest value in the sequence
        "col": 1,          # one number per line
        "format": "plain", # plain text response
        "rnd": "new",      # always generate new numbers
    }
    response = requests.get(RANDOM_URL, params=params, timeout=timeout_seconds)
    response.raise_for_status()

    # The body looks like:
    #   7\n0\n3\n...  (all ten digits, shuffled)
    values = [int(line) for line in response.text.split() if line.strip()]

    if sorted(values) != list(range(10)):
        raise ValueError(f"random.org returned {values!r}, expected a permutation of 0..9.")
    return values


def fetch_code(length: int = CODE_LENGTH, source: Optional[str] = None) -> Code:
    # checked up front so the random.org path can't hand back a short code
    _check_length(length)
    source = source or config.RANDOM_SOURCE
    if source == "local":
        return draw_code(length)

    try:
        values = _fetch_permutation(config.RANDOM_TIMEOUT_SECONDS)
    except (requests.RequestException, ValueError) as exc:
        logger.warning("random.org unavailable (%s); drawing secret locally", exc)
        return draw_code(length)

    return "".join(str(v) for v in values[:length])
