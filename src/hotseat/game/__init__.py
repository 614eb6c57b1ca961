"""Game management layer — controller, session state, events.

Quick start::

    from hotseat.game import GameController

    ctrl = GameController()
    ctrl.reset_game()
    outcome = ctrl.attempt_move("e2", "e4")
"""

from hotseat.game.controller import GameController, GameEvents
from hotseat.game.interfaces import GamePhase, PromotionChooser
from hotseat.game.state import GameState, MoveOutcome

__all__ = [
    # Interfaces
    "GamePhase",
    "PromotionChooser",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MoveOutcome",
]
