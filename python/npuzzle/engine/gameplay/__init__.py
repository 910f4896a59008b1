from npuzzle.engine.gameplay.game import GamePlay
from npuzzle.engine.gameplay.playback import Playback

__all__ = ["GamePlay", "Playback"]
