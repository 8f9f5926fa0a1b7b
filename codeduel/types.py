"""
Labels for clarity.
"""

from typing import Literal

Code = str  # 3 unique digits, ex. "507"
Player = Literal["P1", "P2"]
Winner = Literal["P1", "P2", "draw"]
DuelStatus = Literal["setting_p1", "setting_p2", "playing", "over"]
SoloStatus = Literal["playing", "won", "lost"]
