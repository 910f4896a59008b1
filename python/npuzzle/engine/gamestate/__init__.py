from npuzzle.engine.gamestate.events import EventBus, GameEvent
from npuzzle.engine.gamestate.state import GameState, Phase

__all__ = ["EventBus", "GameEvent", "GameState", "Phase"]
