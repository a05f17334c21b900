"""
象棋规则引擎

在伪合法走法的基础上排除送将与将帅照面，检测将军、将死和困毙。
"""

from typing import List, Optional

from .board import Board
from .geometry import count_pieces_between
from .move import Move
from .move_generator import generate_piece_moves, generate_pseudo_legal_moves
from .pieces import PlayerSide
from ..utils.logger import LoggerMixin


class RuleEngine(LoggerMixin):
    """
    象棋规则引擎

    合法性检查采用"先模拟再过滤"：对每个候选走法拷贝棋盘并执行，
    只保留执行后己方未被将军、且将帅没有照面的走法。
    """

    def generate_legal_moves(self, board: Board, side: PlayerSide) -> List[Move]:
        """
        生成指定一方的所有合法走法

        Args:
            board: 当前棋盘状态
            side: 走子方

        Returns:
            List[Move]: 合法走法列表
        """
        legal_moves = [
            move for move in generate_pseudo_legal_moves(board, side)
            if self._is_safe_after(board, move, side)
        ]
        self.log_debug("%s 共有 %d 个合法走法", side.display_name, len(legal_moves))
        return legal_moves

    def generate_legal_piece_moves(self, board: Board, pos) -> List[Move]:
        """生成指定位置棋子的合法走法，用于界面高亮"""
        piece = board.piece_at(pos)
        if piece is None:
            return []
        return [move for move in generate_piece_moves(board, pos)
                if self._is_safe_after(board, move, piece.side)]

    def is_legal_move(self, board: Board, move: Move, side: PlayerSide) -> bool:
        """
        验证走法是否合法

        Args:
            board: 当前棋盘状态
            move: 要验证的走法（只比较起止坐标）
            side: 走子方

        Returns:
            bool: 是否合法
        """
        return self.find_legal_move(board, move, side) is not None

    def find_legal_move(self, board: Board, move: Move, side: PlayerSide) -> Optional[Move]:
        """
        在合法走法中查找与给定坐标相同的走法

        Returns:
            Optional[Move]: 带有棋子信息的合法走法，不合法时返回 None
        """
        piece = board.piece_at(move.from_pos)
        if piece is None or piece.side is not side:
            return None
        for candidate in generate_piece_moves(board, move.from_pos):
            if candidate == move:
                return candidate if self._is_safe_after(board, candidate, side) else None
        return None

    def _is_safe_after(self, board: Board, move: Move, side: PlayerSide) -> bool:
        """在棋盘拷贝上执行走法，检查己方是否安全"""
        simulated = board.clone()
        simulated.move_piece(move.from_pos, move.to_pos)
        if self.generals_facing(simulated):
            return False
        return not self.is_in_check(simulated, side)

    def is_in_check(self, board: Board, side: PlayerSide) -> bool:
        """
        检查指定一方是否被将军

        生成对方全部伪合法走法（不考虑对方自身是否被将），
        只要有一个走法的目标是己方帅/将即为被将军。

        Raises:
            GeneralNotFoundError: 己方帅/将已不在棋盘上
        """
        general_pos = board.find_general(side)
        return any(move.to_pos == general_pos
                   for move in generate_pseudo_legal_moves(board, side.opponent))

    def generals_facing(self, board: Board) -> bool:
        """
        检查将帅是否照面：同一列且中间没有任何棋子

        任何一方的帅/将不在棋盘上时视为不照面。
        """
        if not (board.has_general(PlayerSide.RED) and board.has_general(PlayerSide.BLACK)):
            return False
        red = board.find_general(PlayerSide.RED)
        black = board.find_general(PlayerSide.BLACK)
        if red.x != black.x:
            return False
        return count_pieces_between(board, red, black) == 0

    def has_legal_move(self, board: Board, side: PlayerSide) -> bool:
        """是否至少有一个合法走法，找到第一个即返回"""
        return any(self._is_safe_after(board, move, side)
                   for move in generate_pseudo_legal_moves(board, side))

    def is_checkmate(self, board: Board, side: PlayerSide) -> bool:
        """被将军且没有合法走法"""
        return self.is_in_check(board, side) and not self.has_legal_move(board, side)

    def is_stalemate(self, board: Board, side: PlayerSide) -> bool:
        """没有被将军但没有合法走法（困毙）"""
        return not self.is_in_check(board, side) and not self.has_legal_move(board, side)
