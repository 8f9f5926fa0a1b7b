"""
Rejections raised before any game state changes.

InvalidCodeError subclasses ValueError so callers that only care about
"bad input" can catch ValueError, same as the length guard did before.
"""


class InvalidCodeError(ValueError):
    kind = "invalid_code"


class InvalidLengthError(InvalidCodeError):
    kind = "invalid_length"


class InvalidCharacterError(InvalidCodeError):
    kind = "invalid_character"


class InvalidUniquenessError(InvalidCodeError):
    kind = "invalid_uniqueness"


class InvalidActionError(Exception):
    """Action not allowed in the game's current phase (ex. guessing during setup)."""
