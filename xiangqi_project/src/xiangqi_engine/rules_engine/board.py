"""
象棋棋盘数据结构

定义棋盘的表示、棋子增删、拷贝以及格式转换功能。
"""

import hashlib
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from .geometry import BOARD_COLUMNS, BOARD_ROWS, is_in_bounds
from .pieces import FEN_SYMBOLS, Piece, PieceType, PlayerSide, Position, initial_pieces
from ..utils.exceptions import GameStateError, GeneralNotFoundError, NotationError


class Board:
    """
    象棋棋盘类

    用 10x9 的整数矩阵 (行 x 列) 保存棋子占位：0 为空，红方为正，黑方为负，
    绝对值为 PieceType 的数值。所有棋子由棋盘持有，对外只返回快照。
    """

    EMPTY = 0

    def __init__(self, matrix: Optional[np.ndarray] = None):
        """
        初始化棋盘

        Args:
            matrix: 10x9 的棋盘矩阵，为 None 时创建空棋盘
        """
        if matrix is None:
            self.grid = np.zeros((BOARD_ROWS, BOARD_COLUMNS), dtype=np.int8)
        else:
            if matrix.shape != (BOARD_ROWS, BOARD_COLUMNS):
                raise GameStateError(f"棋盘尺寸错误: {matrix.shape}", "应为(10, 9)")
            self.grid = np.array(matrix, dtype=np.int8)

    @classmethod
    def initial(cls) -> 'Board':
        """创建标准开局棋盘"""
        board = cls()
        for piece in initial_pieces():
            board.place_piece(piece)
        return board

    @classmethod
    def from_pieces(cls, pieces) -> 'Board':
        """由棋子列表创建棋盘"""
        board = cls()
        for piece in pieces:
            board.place_piece(piece)
        return board

    # ==================== 占位查询 ====================

    def piece_at(self, pos: Tuple[int, int]) -> Optional[Piece]:
        """
        获取指定位置的棋子

        Args:
            pos: 位置坐标 (x, y)

        Returns:
            Optional[Piece]: 棋子快照，空位或越界时返回 None
        """
        if not is_in_bounds(pos):
            return None
        code = int(self.grid[pos[1], pos[0]])
        if code == self.EMPTY:
            return None
        return Piece.from_code(code, pos)

    def code_at(self, pos: Tuple[int, int]) -> int:
        return int(self.grid[pos[1], pos[0]])

    def is_empty(self, pos: Tuple[int, int]) -> bool:
        return self.grid[pos[1], pos[0]] == self.EMPTY

    def is_own_piece(self, pos: Tuple[int, int], side: PlayerSide) -> bool:
        code = self.grid[pos[1], pos[0]]
        return code != self.EMPTY and (code > 0) == (side is PlayerSide.RED)

    def is_enemy_piece(self, pos: Tuple[int, int], side: PlayerSide) -> bool:
        code = self.grid[pos[1], pos[0]]
        return code != self.EMPTY and (code > 0) != (side is PlayerSide.RED)

    def pieces(self, side: Optional[PlayerSide] = None) -> Iterator[Piece]:
        """
        按行优先顺序遍历棋子

        Args:
            side: 指定一方，None 表示双方
        """
        rows, cols = np.nonzero(self.grid)
        for y, x in zip(rows.tolist(), cols.tolist()):
            code = int(self.grid[y, x])
            if side is None or (code > 0) == (side is PlayerSide.RED):
                yield Piece.from_code(code, (x, y))

    def count_pieces(self, side: Optional[PlayerSide] = None) -> Dict[PieceType, int]:
        """统计各类棋子数量"""
        counts: Dict[PieceType, int] = {}
        for piece in self.pieces(side):
            counts[piece.piece_type] = counts.get(piece.piece_type, 0) + 1
        return counts

    def find_general(self, side: PlayerSide) -> Position:
        """
        找到指定一方帅/将的位置

        Raises:
            GeneralNotFoundError: 帅/将已被吃掉
        """
        code = int(PieceType.GENERAL) * int(side)
        rows, cols = np.nonzero(self.grid == code)
        if len(rows) == 0:
            raise GeneralNotFoundError(side.display_name)
        return Position(int(cols[0]), int(rows[0]))

    def has_general(self, side: PlayerSide) -> bool:
        return bool(np.any(self.grid == int(PieceType.GENERAL) * int(side)))

    # ==================== 修改操作 ====================

    def place_piece(self, piece: Piece) -> None:
        """
        在棋子自身的位置上放置棋子

        Raises:
            GameStateError: 位置越界或已被占用
        """
        pos = piece.position
        if not is_in_bounds(pos):
            raise GameStateError(f"无法放置{piece.glyph}", f"坐标越界 {tuple(pos)}")
        if not self.is_empty(pos):
            raise GameStateError(f"无法放置{piece.glyph}", f"位置 {tuple(pos)} 已有棋子")
        self.grid[pos.y, pos.x] = piece.code

    def remove_piece(self, pos: Tuple[int, int]) -> Optional[Piece]:
        """移除并返回指定位置的棋子"""
        piece = self.piece_at(pos)
        if piece is not None:
            self.grid[pos[1], pos[0]] = self.EMPTY
        return piece

    def move_piece(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> Optional[Piece]:
        """
        移动棋子，目标位置上的棋子被吃掉

        Returns:
            Optional[Piece]: 被吃掉的棋子
        """
        moving = self.remove_piece(from_pos)
        if moving is None:
            raise GameStateError(f"起点 {tuple(from_pos)} 没有棋子")
        captured = self.remove_piece(to_pos)
        self.place_piece(moving.moved_to(to_pos))
        return captured

    def clone(self) -> 'Board':
        """创建棋盘的深拷贝"""
        return Board(self.grid.copy())

    def clear(self) -> None:
        self.grid.fill(self.EMPTY)

    # ==================== 格式转换 ====================

    def to_matrix(self) -> np.ndarray:
        return self.grid.copy()

    def signature(self) -> str:
        """
        获取棋子占位的规范签名，用于检测重复局面

        Returns:
            str: 占位矩阵的MD5哈希值
        """
        return hashlib.md5(self.grid.tobytes()).hexdigest()

    def to_fen(self) -> str:
        """
        转换为FEN棋盘部分（从第0行即黑方底线开始）

        Returns:
            str: 如 "rnbakabnr/9/1c5c1/..."
        """
        rows = []
        for y in range(BOARD_ROWS):
            fen_row = ""
            empty_count = 0
            for x in range(BOARD_COLUMNS):
                piece = self.piece_at((x, y))
                if piece is None:
                    empty_count += 1
                    continue
                if empty_count:
                    fen_row += str(empty_count)
                    empty_count = 0
                fen_row += piece.fen_symbol
            if empty_count:
                fen_row += str(empty_count)
            rows.append(fen_row)
        return "/".join(rows)

    @classmethod
    def from_fen(cls, fen: str) -> 'Board':
        """
        从FEN棋盘部分创建棋盘，多余的字段（如走子方）会被忽略

        Raises:
            NotationError: FEN格式错误
        """
        parts = fen.split()
        if not parts:
            raise NotationError(fen, "FEN为空")
        rows = parts[0].split("/")
        if len(rows) != BOARD_ROWS:
            raise NotationError(fen, "FEN格式应包含10行")

        symbol_to_type = {symbol: piece_type for piece_type, symbol in FEN_SYMBOLS.items()}
        board = cls()
        for y, row in enumerate(rows):
            x = 0
            for char in row:
                if char.isdigit():
                    x += int(char)
                    continue
                piece_type = symbol_to_type.get(char.upper())
                if piece_type is None:
                    raise NotationError(fen, f"未知棋子符号 '{char}'")
                if x >= BOARD_COLUMNS:
                    raise NotationError(fen, f"第{y}行列数超出范围")
                side = PlayerSide.RED if char.isupper() else PlayerSide.BLACK
                board.place_piece(Piece(piece_type, side, Position(x, y)))
                x += 1
            if x != BOARD_COLUMNS:
                raise NotationError(fen, f"第{y}行应有9列，实际为{x}")
        return board

    def to_visual_string(self) -> str:
        """
        转换为可视化字符串

        Returns:
            str: 带坐标的棋盘文字图
        """
        lines = ["   a  b  c  d  e  f  g  h  i"]
        for y in range(BOARD_ROWS):
            cells = []
            for x in range(BOARD_COLUMNS):
                piece = self.piece_at((x, y))
                cells.append(piece.glyph if piece else '· ')
            lines.append(f"{y}  " + " ".join(cells))
            if y == BOARD_ROWS // 2 - 1:
                lines.append("   " + "~" * 26)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_visual_string()

    def __repr__(self) -> str:
        return f"Board('{self.to_fen()}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    __hash__ = None

    def __len__(self) -> int:
        return int(np.count_nonzero(self.grid))
