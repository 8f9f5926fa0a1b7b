"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Defines the structure of API requests and responses.
- Secrets are only ever placed in a response once the game is over.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

# 1. A 3-digit code submitted by a player (secret or guess)
class CodeRequest(BaseModel):
    code: str = Field(..., description="Three unique digits, ex. '507'")

    @field_validator("code")
    @classmethod
    def strip_spaces(cls, value: str) -> str:
        """
        Only trims whitespace here. Length, digits and uniqueness are checked
        by the engine so the route can report which rule was broken.
        """
        return value.strip()

    model_config = {
        "json_schema_extra": {
            "examples": [{"code": "507"}]
        }
    }

# 2. A guess at the opponent's code
class GuessRequest(BaseModel):
    guess: str = Field(..., description="Three unique digits, ex. '213'")

    @field_validator("guess")
    @classmethod
    def strip_spaces(cls, value: str) -> str:
        return value.strip()

    model_config = {
        "json_schema_extra": {
            "examples": [{"guess": "213"}]
        }
    }

# 3. Feedback for a single guess
class GuessEntryOut(BaseModel):
    guess: str = Field(..., description="The player's guess")
    bulls: int = Field(..., description="Digits right and in the right position")
    cows: int = Field(..., description="Digits in the code but in the wrong position")
    feedback: str = Field(..., description="Feedback message")
    timestamp: float = Field(..., description="When the guess was made")

# 4. Solo game
class NewSoloGameResponse(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game; secret is never returned")
    status: Literal["playing", "won", "lost"] = Field(..., description="Current state of the game")
    guesses_remaining: int = Field(..., description="How many guesses remain")

class SoloGameState(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game")
    status: Literal["playing", "won", "lost"] = Field(..., description="Current state of the game")
    guesses_remaining: int = Field(..., description="How many guesses remain")
    history: List[GuessEntryOut] = Field(..., description="All guesses so far, newest first")
    secret: str | None = Field(None, description="The secret code (only revealed once the game is over)")

class SoloGuessResponse(BaseModel):
    status: Literal["playing", "won", "lost"] = Field(..., description="Current state of the game")
    guesses_remaining: int = Field(..., description="How many guesses remain")
    feedback: GuessEntryOut | None = Field(None, description="Feedback from the latest guess")
    secret: str | None = Field(None, description="The secret code (only revealed once the game is over)")
    note: str | None = Field(None, description="Extra note (ex. 'Game lost. No more guesses allowed.')")

# 5. Duel
class DuelState(BaseModel):
    duel_id: str = Field(..., description="Unique ID for the duel")
    status: Literal["setting_p1", "setting_p2", "playing", "over"] = Field(..., description="Current phase")
    turn: int = Field(..., description="Current turn, 1-based")
    max_turns: int = Field(..., description="Turns before the duel is a draw")
    current_player: Literal["P1", "P2"] = Field(..., description="Whose move it is")
    setting_player: Literal["P1", "P2"] | None = Field(None, description="Whose secret is being set (setup phases only)")
    winner: Literal["P1", "P2", "draw"] | None = Field(None, description="Set once the duel is over")
    p1_history: List[GuessEntryOut] = Field(..., description="Player 1's guesses, newest first")
    p2_history: List[GuessEntryOut] = Field(..., description="Player 2's guesses, newest first")
    p1_secret: str | None = Field(None, description="Player 1's code (only revealed once the duel is over)")
    p2_secret: str | None = Field(None, description="Player 2's code (only revealed once the duel is over)")

class DuelGuessResponse(BaseModel):
    state: DuelState = Field(..., description="Duel after the guess")
    feedback: GuessEntryOut | None = Field(None, description="Feedback for the guess just made")
    note: str | None = Field(None, description="Extra note (ex. 'Duel over. No more guesses allowed.')")

# 6. Stateless scoring, camelCase on the wire
class VersusFeedbackRequest(BaseModel):
    model_config = {"populate_by_name": True}

    secret_code: str = Field(..., alias="secretCode", description="The opponent's secret 3-digit code")
    guess: str = Field(..., description="The player's 3-digit guess")
    guesses_remaining: int = Field(..., alias="guessesRemaining", ge=0, description="Guesses left before this one")

class VersusFeedbackResponse(BaseModel):
    model_config = {"populate_by_name": True}

    feedback: str = Field(..., description="Correct digits and how many are in place")
    guesses_remaining: int = Field(..., alias="guessesRemaining", ge=0, description="Guesses left after this one")
    is_correct_guess: bool = Field(..., alias="isCorrectGuess", description="Whether the guess cracked the code")
    has_lost: bool = Field(..., alias="hasLost", description="True when the player ran out of guesses")

# 7. Scoreboard
class StatsOut(BaseModel):
    games_started: int = Field(..., description="Solo games started this session")
    games_won: int = Field(..., description="Solo games won this session")
    games_lost: int = Field(..., description="Solo games lost this session")

    current_streak: int = Field(..., description="Current consecutive solo wins")
    best_streak: int = Field(..., description="Best consecutive solo wins")

    average_guesses_to_win: Optional[float] = Field(
        None, description="Average number of guesses used in solo wins"
    )
    fastest_win_guesses: Optional[int] = Field(
        None, description="Fewest guesses taken to win a solo game"
    )

    duels_started: int = Field(..., description="Duels started this session")
    p1_wins: int = Field(..., description="Duels won by player 1")
    p2_wins: int = Field(..., description="Duels won by player 2")
    draws: int = Field(..., description="Duels that ran out of turns")

# 8. Rejected input
class ErrorOut(BaseModel):
    error: str = Field(..., description="Which rule was broken, ex. 'invalid_uniqueness'")
    message: str = Field(..., description="Human-readable explanation")
