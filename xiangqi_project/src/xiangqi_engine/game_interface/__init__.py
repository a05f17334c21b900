"""
对局接口模块

包含函数式接口、对局会话和玩家计时器。
"""

from .api import new_game, legal_moves, apply_move, undo, game_result
from .player import Player, PlayerTimer
from .game_session import GameSession

__all__ = [
    'new_game', 'legal_moves', 'apply_move', 'undo', 'game_result',
    'Player', 'PlayerTimer', 'GameSession'
]
