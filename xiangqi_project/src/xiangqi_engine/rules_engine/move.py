"""
象棋走法数据结构

定义象棋走法的表示和坐标记法转换功能。
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .pieces import Piece, Position
from ..utils.exceptions import NotationError


_COLUMN_LETTERS = 'abcdefghi'


@dataclass(frozen=True)
class Move:
    """
    象棋走法类

    包含起始位置、目标位置、移动的棋子和被吃的棋子。
    相等性只比较起止位置，调用方可以只给出坐标去匹配生成的合法走法。
    """
    from_pos: Position
    to_pos: Position
    piece: Optional[Piece] = field(default=None, compare=False)
    captured_piece: Optional[Piece] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'from_pos', Position(*self.from_pos))
        object.__setattr__(self, 'to_pos', Position(*self.to_pos))
        self._validate_positions()

    def _validate_positions(self):
        """验证位置坐标的有效性"""
        for pos in (self.from_pos, self.to_pos):
            if not (0 <= pos.x <= 8 and 0 <= pos.y <= 9):
                raise ValueError(f"无效的位置坐标: {tuple(pos)}")
        if self.from_pos == self.to_pos:
            raise ValueError(f"起点和终点相同: {tuple(self.from_pos)}")

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    def to_coordinate_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 坐标记法字符串，如 "b9c7"（列字母 + 行数字）
        """
        return (f"{_COLUMN_LETTERS[self.from_pos.x]}{self.from_pos.y}"
                f"{_COLUMN_LETTERS[self.to_pos.x]}{self.to_pos.y}")

    @classmethod
    def from_coordinate_notation(cls, notation: str) -> 'Move':
        """
        从坐标记法创建Move对象

        Args:
            notation: 坐标记法字符串，如 "b9c7"

        Returns:
            Move: 只含坐标的走法，需要与合法走法匹配后才带有棋子信息
        """
        text = notation.strip().lower()
        if (len(text) != 4 or text[0] not in _COLUMN_LETTERS or text[2] not in _COLUMN_LETTERS
                or not text[1].isdigit() or not text[3].isdigit()):
            raise NotationError(notation, "坐标记法应为4个字符，如 b9c7")

        from_pos = (_COLUMN_LETTERS.index(text[0]), int(text[1]))
        to_pos = (_COLUMN_LETTERS.index(text[2]), int(text[3]))
        try:
            return cls(from_pos=from_pos, to_pos=to_pos)
        except ValueError as e:
            raise NotationError(notation, str(e)) from e

    def __str__(self) -> str:
        return self.to_coordinate_notation()

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'from_pos': tuple(self.from_pos),
            'to_pos': tuple(self.to_pos),
            'piece': self.piece.code if self.piece else None,
            'captured_piece': self.captured_piece.code if self.captured_piece else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Move':
        """从字典创建Move对象"""
        from_pos: Tuple[int, int] = tuple(data['from_pos'])
        to_pos: Tuple[int, int] = tuple(data['to_pos'])
        piece = data.get('piece')
        captured = data.get('captured_piece')
        return cls(
            from_pos=from_pos,
            to_pos=to_pos,
            piece=Piece.from_code(piece, from_pos) if piece else None,
            captured_piece=Piece.from_code(captured, to_pos) if captured else None,
        )
