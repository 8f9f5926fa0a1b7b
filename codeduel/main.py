'''
Code Duel API

Solo (vs. a random secret):
POST /solo                  -> start a game
GET  /solo/{id}             -> read state & history
POST /solo/{id}/guess       -> submit a guess
POST /solo/{id}/reset       -> play again with a new secret

Duel (two players, one screen):
POST /duels                 -> start a duel (player 1 sets a code first)
GET  /duels/{id}            -> read state & both histories
POST /duels/{id}/code       -> set the next player's secret
POST /duels/{id}/guess      -> current player guesses
POST /duels/{id}/reset      -> new game, everything cleared

Extras:
POST /feedback              -> score one guess, no game needed
GET  /stats                 -> scoreboard
POST /stats/reset           -> reset scoreboard
GET  /health                -> liveness

All state lives in memory (GameStore); a restart starts fresh.
'''

import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .engine import versus_feedback
from .errors import InvalidActionError, InvalidCodeError
from .game import DuelGame, GuessEntry, SoloGame
from .random_client import fetch_code
from .store import GameStore

from .schemas import (
    CodeRequest,
    DuelGuessResponse,
    DuelState,
    ErrorOut,
    GuessEntryOut,
    GuessRequest,
    NewSoloGameResponse,
    SoloGameState,
    SoloGuessResponse,
    StatsOut,
    VersusFeedbackRequest,
    VersusFeedbackResponse,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)-8s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Code Duel API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# One store per process; tests swap it out through dependency_overrides
store = GameStore()

def get_store() -> GameStore:
    return store

@app.on_event("startup")
def _log_settings():
    logger.info(
        "Code Duel ready (env=%s, max_turns=%d, max_guesses=%d, random_source=%s)",
        config.APP_ENV, config.MAX_TURNS, config.MAX_GUESSES, config.RANDOM_SOURCE,
    )

# ---------------- Helpers ----------------

def _reject(exc: InvalidCodeError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=ErrorOut(error=exc.kind, message=str(exc)).model_dump(),
    )

def _to_guess_out(entry: GuessEntry) -> GuessEntryOut:
    return GuessEntryOut(
        guess=entry.guess,
        bulls=entry.bulls,
        cows=entry.cows,
        feedback=entry.feedback,
        timestamp=entry.timestamp,
    )

def _to_solo_state(game: SoloGame) -> SoloGameState:
    return SoloGameState(
        game_id=game.id,
        status=game.status,
        guesses_remaining=game.guesses_remaining,
        history=[_to_guess_out(h) for h in game.history],
        secret=game.revealed_secret,
    )

def _to_duel_state(duel: DuelGame) -> DuelState:
    # keep both codes hidden until the duel is decided
    over = duel.status == "over"
    return DuelState(
        duel_id=duel.id,
        status=duel.status,
        turn=duel.turn,
        max_turns=duel.max_turns,
        current_player=duel.current_player,
        setting_player=duel.setting_player,
        winner=duel.winner,
        p1_history=[_to_guess_out(h) for h in duel.p1_history],
        p2_history=[_to_guess_out(h) for h in duel.p2_history],
        p1_secret=duel.p1_secret if over else None,
        p2_secret=duel.p2_secret if over else None,
    )

# ---------------- Solo routes ----------------

@app.post("/solo", response_model=NewSoloGameResponse, summary="Start a solo game")
def start_solo(store: GameStore = Depends(get_store)) -> NewSoloGameResponse:
    secret = fetch_code()                   # random.org w/ secure fallback
    game = store.create_solo(secret)
    return NewSoloGameResponse(
        game_id=game.id,
        status=game.status,
        guesses_remaining=game.guesses_remaining,
    )

@app.get("/solo/{game_id}", response_model=SoloGameState, summary="Get current solo game state")
def get_solo(game_id: str, store: GameStore = Depends(get_store)) -> SoloGameState:
    game = store.get_solo(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")
    return _to_solo_state(game)

@app.post("/solo/{game_id}/guess", response_model=SoloGuessResponse, summary="Submit a guess")
def guess_solo(
    game_id: str,
    payload: GuessRequest,
    store: GameStore = Depends(get_store),
) -> SoloGuessResponse:
    # the game validates the guess before touching history/guesses_remaining
    try:
        result = store.guess_solo(game_id, payload.guess)
    except InvalidCodeError as exc:
        raise _reject(exc)
    if not result:
        raise HTTPException(status_code=404, detail="Game not found")

    # entry is None when the game had already ended and the guess was ignored
    game, entry = result
    finished = game.status != "playing"

    return SoloGuessResponse(
        status=game.status,
        guesses_remaining=game.guesses_remaining,
        feedback=_to_guess_out(entry) if entry else None,
        secret=game.revealed_secret,
        note=(f"Game {game.status}. No more guesses allowed." if finished else None),
    )

@app.post("/solo/{game_id}/reset", response_model=NewSoloGameResponse, summary="Play again with a new secret")
def reset_solo(game_id: str, store: GameStore = Depends(get_store)) -> NewSoloGameResponse:
    if not store.get_solo(game_id):
        raise HTTPException(status_code=404, detail="Game not found")
    game = store.reset_solo(game_id, fetch_code())
    return NewSoloGameResponse(
        game_id=game.id,
        status=game.status,
        guesses_remaining=game.guesses_remaining,
    )

# ---------------- Duel routes ----------------

@app.post("/duels", response_model=DuelState, summary="Start a two-player duel")
def start_duel(store: GameStore = Depends(get_store)) -> DuelState:
    return _to_duel_state(store.create_duel())

@app.get("/duels/{duel_id}", response_model=DuelState, summary="Get current duel state")
def get_duel(duel_id: str, store: GameStore = Depends(get_store)) -> DuelState:
    duel = store.get_duel(duel_id)
    if not duel:
        raise HTTPException(status_code=404, detail="Duel not found")
    return _to_duel_state(duel)

@app.post("/duels/{duel_id}/code", response_model=DuelState, summary="Set the next player's secret code")
def set_duel_code(
    duel_id: str,
    payload: CodeRequest,
    store: GameStore = Depends(get_store),
) -> DuelState:
    try:
        duel = store.submit_duel_code(duel_id, payload.code)
    except InvalidCodeError as exc:
        raise _reject(exc)
    except InvalidActionError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    if not duel:
        raise HTTPException(status_code=404, detail="Duel not found")
    return _to_duel_state(duel)

@app.post("/duels/{duel_id}/guess", response_model=DuelGuessResponse, summary="Current player guesses")
def guess_duel(
    duel_id: str,
    payload: GuessRequest,
    store: GameStore = Depends(get_store),
) -> DuelGuessResponse:
    try:
        result = store.guess_duel(duel_id, payload.guess)
    except InvalidCodeError as exc:
        raise _reject(exc)
    except InvalidActionError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    if not result:
        raise HTTPException(status_code=404, detail="Duel not found")

    duel, entry = result
    return DuelGuessResponse(
        state=_to_duel_state(duel),
        feedback=_to_guess_out(entry) if entry else None,
        note=("Duel over. No more guesses allowed." if duel.status == "over" else None),
    )

@app.post("/duels/{duel_id}/reset", response_model=DuelState, summary="New game: clear codes and histories")
def reset_duel(duel_id: str, store: GameStore = Depends(get_store)) -> DuelState:
    duel = store.reset_duel(duel_id)
    if not duel:
        raise HTTPException(status_code=404, detail="Duel not found")
    return _to_duel_state(duel)

# ---------------- Extras ----------------

@app.post("/feedback", response_model=VersusFeedbackResponse, summary="Score one guess against a given secret")
def feedback(payload: VersusFeedbackRequest) -> VersusFeedbackResponse:
    try:
        result = versus_feedback(payload.secret_code, payload.guess, payload.guesses_remaining)
    except InvalidCodeError as exc:
        raise _reject(exc)
    return VersusFeedbackResponse(
        feedback=result.feedback,
        guesses_remaining=result.guesses_remaining,
        is_correct_guess=result.is_correct_guess,
        has_lost=result.has_lost,
    )

@app.get("/stats", response_model=StatsOut, summary="Get scoreboard")
def get_stats(store: GameStore = Depends(get_store)) -> StatsOut:
    stats = store.get_stats()
    avg = (stats.total_guesses_in_wins / stats.games_won) if stats.games_won > 0 else None
    return StatsOut(
        games_started=stats.games_started,
        games_won=stats.games_won,
        games_lost=stats.games_lost,
        current_streak=stats.current_streak,
        best_streak=stats.best_streak,
        average_guesses_to_win=avg,
        fastest_win_guesses=stats.fastest_win_guesses,
        duels_started=stats.duels_started,
        p1_wins=stats.p1_wins,
        p2_wins=stats.p2_wins,
        draws=stats.draws,
    )

@app.post("/stats/reset", summary="Reset the scoreboard")
def reset_stats(store: GameStore = Depends(get_store)) -> dict:
    store.reset_stats()
    return {"message": "Stats reset."}

@app.get("/health", summary="Liveness check")
def health() -> dict:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("codeduel.main:app", host="127.0.0.1", port=8000, reload=config.APP_ENV == "local")
