"""
Type definitions used across layers
"""

from enum import StrEnum


class GameStatus(StrEnum):
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class TurnAction(StrEnum):
    PLACE = "place"
    PASS = "pass"
    EXCHANGE = "exchange"
