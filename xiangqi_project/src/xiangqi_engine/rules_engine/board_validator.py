"""
棋局合法性验证器

检查任意摆放的棋局是否满足棋子数量、位置与将帅不照面等不变量。
"""

from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .board import Board
from .geometry import BOARD_COLUMNS, BOARD_ROWS, count_pieces_between, is_in_palace, is_on_own_side
from .pieces import INITIAL_PIECE_COUNTS, PieceType, PlayerSide
from .rule_engine import RuleEngine


# 相/象可以到达的七个点 (x, y)，以红方为准，黑方按行镜像
RED_ELEPHANT_POINTS = {(2, 9), (6, 9), (0, 7), (4, 7), (8, 7), (2, 5), (6, 5)}


class BoardValidator:
    """
    棋局合法性验证器

    提供各项棋局状态的验证功能，每项验证返回 (是否合法, 错误信息列表)。
    """

    def __init__(self, rule_engine: Optional[RuleEngine] = None):
        self.rule_engine = rule_engine or RuleEngine()

    def validate_board_structure(self, board: Board) -> Tuple[bool, List[str]]:
        """验证棋盘尺寸和编码范围"""
        errors = []

        if board.grid.shape != (BOARD_ROWS, BOARD_COLUMNS):
            errors.append(f"棋盘尺寸错误: {board.grid.shape}, 应为(10, 9)")

        if not np.issubdtype(board.grid.dtype, np.integer):
            errors.append(f"棋盘数据类型错误: {board.grid.dtype}, 应为整数")
        elif np.any(np.abs(board.grid) > int(max(PieceType))):
            errors.append("棋盘中存在未知的棋子编码")

        return len(errors) == 0, errors

    def validate_piece_counts(self, board: Board) -> Tuple[bool, List[str]]:
        """
        验证棋子数量

        每类棋子不能超过初始数量，双方必须各有一个帅/将。
        """
        errors = []

        for side in PlayerSide:
            counts = board.count_pieces(side)
            for piece_type, limit in INITIAL_PIECE_COUNTS.items():
                count = counts.get(piece_type, 0)
                if count > limit:
                    errors.append(f"{side.display_name}{piece_type.name}数量超限: {count} > {limit}")

            general_count = counts.get(PieceType.GENERAL, 0)
            if general_count != 1:
                errors.append(f"{side.display_name}帅/将数量错误: {general_count}, 应为1")

        return len(errors) == 0, errors

    def validate_piece_positions(self, board: Board) -> Tuple[bool, List[str]]:
        """验证受区域限制的棋子位置"""
        errors = []

        for piece in board.pieces():
            pos = piece.position
            side = piece.side

            if piece.piece_type in (PieceType.GENERAL, PieceType.ADVISOR):
                if not is_in_palace(pos, side):
                    errors.append(f"{side.display_name}{piece.glyph}位置错误: {tuple(pos)}, 应在九宫内")

            elif piece.piece_type is PieceType.ELEPHANT:
                red_view = pos if side is PlayerSide.RED else (pos.x, BOARD_ROWS - 1 - pos.y)
                if not is_on_own_side(pos, side):
                    errors.append(f"{side.display_name}{piece.glyph}过河: {tuple(pos)}")
                elif red_view not in RED_ELEPHANT_POINTS:
                    errors.append(f"{side.display_name}{piece.glyph}不在可到达的位置: {tuple(pos)}")

            elif piece.piece_type is PieceType.SOLDIER:
                # 兵/卒不能后退，所以不会出现在己方起始行之后
                if (side is PlayerSide.RED and pos.y > 6) or (side is PlayerSide.BLACK and pos.y < 3):
                    errors.append(f"{side.display_name}{piece.glyph}位置错误: {tuple(pos)}")

        return len(errors) == 0, errors

    def validate_generals_facing(self, board: Board) -> Tuple[bool, List[str]]:
        """验证帅将是否照面"""
        errors = []

        if board.has_general(PlayerSide.RED) and board.has_general(PlayerSide.BLACK):
            red = board.find_general(PlayerSide.RED)
            black = board.find_general(PlayerSide.BLACK)
            if red.x == black.x and count_pieces_between(board, red, black) == 0:
                errors.append("帅将照面，中间无棋子阻挡")

        return len(errors) == 0, errors

    def validate_side_to_move(self, board: Board, side_to_move: PlayerSide) -> Tuple[bool, List[str]]:
        """
        验证非走子方没有被将军

        轮到一方走棋时，对方的帅/将不可能正被将军，否则上一步是送将。

        Args:
            board: 要验证的棋盘
            side_to_move: 当前走子方
        """
        errors = []

        waiting = side_to_move.opponent
        if board.has_general(waiting) and self.rule_engine.is_in_check(board, waiting):
            errors.append(f"轮到{side_to_move.display_name}走棋，但{waiting.display_name}正被将军")

        return len(errors) == 0, errors

    def full_validation(
        self,
        board: Board,
        side_to_move: Optional[PlayerSide] = None
    ) -> Tuple[bool, List[str]]:
        """
        完整的棋局验证

        Args:
            board: 要验证的棋盘
            side_to_move: 当前走子方，给出时同时检查非走子方是否被将军

        Returns:
            Tuple[bool, List[str]]: (是否合法, 所有错误信息列表)
        """
        all_errors = []
        for _, validation_func in self._validations(side_to_move):
            _, errors = validation_func(board)
            all_errors.extend(errors)
        return len(all_errors) == 0, all_errors

    def get_validation_report(
        self,
        board: Board,
        side_to_move: Optional[PlayerSide] = None
    ) -> Dict[str, Any]:
        """
        获取详细的验证报告

        Returns:
            Dict[str, Any]: 验证报告
        """
        report = {
            'overall_valid': True,
            'total_errors': 0,
            'validations': {}
        }

        for test_name, test_func in self._validations(side_to_move):
            is_valid, errors = test_func(board)
            report['validations'][test_name] = {
                'valid': is_valid,
                'errors': errors,
                'error_count': len(errors)
            }
            if not is_valid:
                report['overall_valid'] = False
                report['total_errors'] += len(errors)

        return report

    def _validations(self, side_to_move: Optional[PlayerSide] = None):
        validations = [
            ('structure', self.validate_board_structure),
            ('piece_counts', self.validate_piece_counts),
            ('piece_positions', self.validate_piece_positions),
            ('generals_facing', self.validate_generals_facing),
        ]
        if side_to_move is not None:
            validations.append(
                ('side_to_move', lambda board: self.validate_side_to_move(board, side_to_move))
            )
        return validations
