"""
象棋规则引擎模块

包含棋局表示、走法生成、合法性过滤与对局状态机。
"""

from .pieces import PieceType, PlayerSide, Position, Piece, piece_text
from .move import Move
from .board import Board
from .move_generator import generate_piece_moves, generate_pseudo_legal_moves
from .rule_engine import RuleEngine
from .board_validator import BoardValidator
from .game_state import GameState, GameStatus, GameResult

__all__ = [
    'PieceType', 'PlayerSide', 'Position', 'Piece', 'piece_text',
    'Move', 'Board',
    'generate_piece_moves', 'generate_pseudo_legal_moves',
    'RuleEngine', 'BoardValidator',
    'GameState', 'GameStatus', 'GameResult'
]
