# engine_py/src/cardgame_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

# Specific error codes
INVALID_COMMAND = "INVALID_COMMAND"
ACTION_NOT_ALLOWED = "ACTION_NOT_ALLOWED"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
ROOM_FULL = "ROOM_FULL"
DUPLICATE_PLAYER = "DUPLICATE_PLAYER"
UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
OWNERSHIP = "OWNERSHIP"
EMPTY_PLAY = "EMPTY_PLAY"
INVALID_PLAY = "INVALID_PLAY"
STALE_DELAY = "STALE_DELAY"
NO_CHANGE = "NO_CHANGE"

# Helper function to raise common errors
def raise_error(code: str, message: str):
    raise GameError(code, message)
