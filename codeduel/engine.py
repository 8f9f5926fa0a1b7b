"""
Pure game logic (no HTTP, no storage).
For each guess we compute two feedback numbers:
- bulls: digits that are right and in the right position
- cows: digits that are in the secret but were guessed in the wrong position

Codes are 3-character strings of unique digits, ex. "507".
"""

from dataclasses import dataclass
from typing import NamedTuple

from .config import CODE_LENGTH, DIGITS
from .errors import InvalidCharacterError, InvalidLengthError, InvalidUniquenessError
from .types import Code

SOLVED_MESSAGE = "Correct! You cracked the code!"
ALL_INCORRECT_MESSAGE = "All incorrect."


class Score(NamedTuple):
    bulls: int
    cows: int


@dataclass(frozen=True)
class VersusFeedback:
    feedback: str
    guesses_remaining: int
    is_correct_guess: bool
    has_lost: bool
    score: Score


def validate_code(code: Code) -> Code:
    """
    Reject anything that isn't exactly CODE_LENGTH unique digits.
    Checked in order: length, characters, uniqueness; first failure wins.
    """
    if len(code) != CODE_LENGTH:
        raise InvalidLengthError(f"Code must be exactly {CODE_LENGTH} digits.")

    for ch in code:
        if ch not in DIGITS:
            raise InvalidCharacterError("Code may only contain the digits 0-9.")

    if len(set(code)) != len(code):
        raise InvalidUniquenessError("Digits must be unique.")

    return code


def score_guess(secret: Code, guess: Code) -> Score:
    """
    Example:
      secret = "123"
      guess  = "213"
      bulls = 1  (the 3 at the end)
      cows  = 2  (2 and 1 are in the secret, just not where they were guessed)

    Exact matches are consumed first so a digit is never counted twice,
    even if duplicates were ever allowed.
    """

    # 0. Validate lengths match
    n = len(secret)
    if n == 0 or len(guess) != n:
        raise ValueError("Secret and guess must be the same non-zero length.")

    secret_used = [False] * n
    guess_used = [False] * n

    # 1. Exact position matches --> bulls
    bulls = 0
    for i in range(n):
        if guess[i] == secret[i]:
            bulls += 1
            secret_used[i] = True
            guess_used[i] = True

    # 2. Remaining guess digits found in a remaining secret position --> cows
    cows = 0
    for i in range(n):
        if guess_used[i]:
            continue
        for j in range(n):
            if not secret_used[j] and secret[j] == guess[i]:
                cows += 1
                secret_used[j] = True
                break

    return Score(bulls, cows)


def format_feedback(score: Score) -> str:
    if score.bulls == CODE_LENGTH:
        return SOLVED_MESSAGE
    if score.bulls == 0 and score.cows == 0:
        return ALL_INCORRECT_MESSAGE
    correct = score.bulls + score.cows
    return f"{correct} correct digit(s), {score.bulls} in the correct position."


def is_win(secret: Code, guess: Code) -> bool:
    """Win = same length and every position matches."""
    return len(secret) > 0 and secret == guess


def versus_feedback(secret_code: Code, guess: Code, guesses_remaining: int) -> VersusFeedback:
    """
    Score one guess against the opponent's secret and work out what is left.

    Pure function of its inputs: the caller owns the game state and
    decides what to do with the result.
    """
    validate_code(secret_code)
    validate_code(guess)
    if guesses_remaining < 0:
        raise ValueError("guesses_remaining must not be negative.")

    score = score_guess(secret_code, guess)
    is_correct = score.bulls == CODE_LENGTH
    remaining = max(guesses_remaining - 1, 0)

    return VersusFeedback(
        feedback=format_feedback(score),
        guesses_remaining=remaining,
        is_correct_guess=is_correct,
        has_lost=remaining == 0 and not is_correct,
        score=score,
    )
