"""
中国象棋规则引擎

实现走法生成、将军与将帅照面检测、将死/困毙/重复局面判定，以及带悔棋的对局状态机。
包括规则引擎、配置管理、日志工具和对局接口。
"""

__version__ = "0.1.0"
__author__ = "Xiangqi Engine Team"

# 导入核心组件
from .rules_engine import Board, Move, Piece, PieceType, PlayerSide, Position, RuleEngine, GameState, GameStatus, GameResult
from .config import ConfigManager, GameConfig, SystemConfig
from .game_interface import GameSession, new_game, legal_moves, apply_move, undo, game_result
from .utils import setup_logger, get_logger, set_external_logger, XiangqiError

__all__ = [
    "__version__", "__author__",
    "Board", "Move", "Piece", "PieceType", "PlayerSide", "Position",
    "RuleEngine", "GameState", "GameStatus", "GameResult",
    "ConfigManager", "GameConfig", "SystemConfig",
    "GameSession", "new_game", "legal_moves", "apply_move", "undo", "game_result",
    "setup_logger", "get_logger", "set_external_logger", "XiangqiError"
]
