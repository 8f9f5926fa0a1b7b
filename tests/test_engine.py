"""
Testing pure game logic.
"""

from itertools import permutations

import pytest

from codeduel.engine import (
    ALL_INCORRECT_MESSAGE,
    SOLVED_MESSAGE,
    Score,
    format_feedback,
    is_win,
    score_guess,
    validate_code,
    versus_feedback,
)
from codeduel.errors import (
    InvalidCharacterError,
    InvalidCodeError,
    InvalidLengthError,
    InvalidUniquenessError,
)

ALL_CODES = ["".join(p) for p in permutations("0123456789", 3)]

def test_score_guess_exact_match():
    assert score_guess("123", "123") == Score(bulls=3, cows=0)

def test_score_guess_no_overlap():
    assert score_guess("123", "456") == (0, 0)

def test_score_guess_bulls_and_cows():
    # pos0 2!=1, pos1 1!=2, pos2 3==3 -> one bull; 2 and 1 are elsewhere -> two cows
    result = score_guess("123", "213")
    assert result.bulls == 1
    assert result.cows == 2

def test_score_guess_only_cows():
    assert score_guess("123", "312") == (0, 3)

def test_score_guess_never_double_counts_duplicates():
    # Not reachable through validate_code, but the two-pass scoring must stay honest.
    # "1" at pos0 is a bull, so the second "1" in the guess has nothing left to match.
    assert score_guess("123", "114") == (1, 0)
    # The secret's single "1" can only be matched by one of the guess's "1"s
    assert score_guess("122", "211") == (0, 2)

def test_score_guess_rejects_length_mismatch():
    with pytest.raises(ValueError):
        score_guess("123", "12")
    with pytest.raises(ValueError):
        score_guess("", "")

def test_score_properties_hold_for_every_pair_against_a_sample_secret():
    for secret in ("012", "987", "350"):
        for guess in ALL_CODES:
            bulls, cows = score_guess(secret, guess)
            positional = sum(1 for s, g in zip(secret, guess) if s == g)
            shared = len(set(secret) & set(guess))
            assert bulls + cows <= 3
            assert bulls == positional
            assert cows == shared - bulls

def test_any_code_against_itself_is_solved():
    for code in ALL_CODES:
        assert score_guess(code, code) == (3, 0)

def test_format_feedback_messages():
    assert format_feedback(Score(3, 0)) == SOLVED_MESSAGE
    assert format_feedback(Score(0, 0)) == ALL_INCORRECT_MESSAGE
    assert format_feedback(Score(1, 2)) == "3 correct digit(s), 1 in the correct position."
    assert format_feedback(Score(0, 1)) == "1 correct digit(s), 0 in the correct position."

@pytest.mark.parametrize(
    "code, error",
    [
        ("12", InvalidLengthError),
        ("1234", InvalidLengthError),
        ("", InvalidLengthError),
        ("1a3", InvalidCharacterError),
        ("-12", InvalidCharacterError),
        ("112", InvalidUniquenessError),
        ("999", InvalidUniquenessError),
    ],
)
def test_validate_code_rejects(code, error):
    with pytest.raises(error) as excinfo:
        validate_code(code)
    # every rejection is also a ValueError / InvalidCodeError
    assert isinstance(excinfo.value, InvalidCodeError)
    assert isinstance(excinfo.value, ValueError)

def test_validate_code_checks_length_before_characters():
    with pytest.raises(InvalidLengthError):
        validate_code("aa")

def test_validate_code_accepts_leading_zero():
    assert validate_code("012") == "012"

def test_is_win_true_and_false():
    assert is_win("123", "123") is True
    assert is_win("123", "132") is False
    assert is_win("", "") is False

def test_versus_feedback_correct_guess():
    result = versus_feedback("507", "507", 10)
    assert result.is_correct_guess is True
    assert result.has_lost is False
    assert result.guesses_remaining == 9
    assert result.feedback == SOLVED_MESSAGE

def test_versus_feedback_last_guess_wrong_is_a_loss():
    result = versus_feedback("507", "123", 1)
    assert result.is_correct_guess is False
    assert result.has_lost is True
    assert result.guesses_remaining == 0
    assert result.feedback == ALL_INCORRECT_MESSAGE

def test_versus_feedback_last_guess_right_is_not_a_loss():
    result = versus_feedback("507", "507", 1)
    assert result.is_correct_guess is True
    assert result.has_lost is False

def test_versus_feedback_never_goes_below_zero():
    result = versus_feedback("507", "123", 0)
    assert result.guesses_remaining == 0
    assert result.has_lost is True

def test_versus_feedback_validates_inputs():
    with pytest.raises(InvalidUniquenessError):
        versus_feedback("507", "550", 5)
    with pytest.raises(InvalidLengthError):
        versus_feedback("5071", "123", 5)
    with pytest.raises(ValueError):
        versus_feedback("507", "123", -1)
