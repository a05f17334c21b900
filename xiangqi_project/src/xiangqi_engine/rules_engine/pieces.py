"""
棋子与坐标定义

定义棋子类型、对弈双方、棋盘坐标以及初始布局。

坐标系统：x 为列 (0-8)，y 为行 (0-9)；黑方在上 (y=0..4)，红方在下 (y=5..9)。
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import List, NamedTuple, Tuple


class PieceType(IntEnum):
    """棋子类型，数值同时作为棋盘矩阵中的编码"""
    GENERAL = 1    # 帥；將
    ADVISOR = 2    # 仕；士
    ELEPHANT = 3   # 相；象
    HORSE = 4      # 傌；馬
    CHARIOT = 5    # 俥；車
    CANNON = 6     # 炮；包
    SOLDIER = 7    # 兵；卒


class PlayerSide(IntEnum):
    """对弈方 (1: 红方, -1: 黑方)"""
    RED = 1
    BLACK = -1

    @property
    def opponent(self) -> 'PlayerSide':
        return PlayerSide(-self.value)

    @property
    def display_name(self) -> str:
        return '红方' if self is PlayerSide.RED else '黑方'


class Position(NamedTuple):
    """棋盘坐标 (列, 行)"""
    x: int
    y: int


# 棋子显示文字 (红方, 黑方)
PIECE_TEXTS = {
    PieceType.GENERAL: ('帥', '將'),
    PieceType.ADVISOR: ('仕', '士'),
    PieceType.ELEPHANT: ('相', '象'),
    PieceType.CHARIOT: ('俥', '車'),
    PieceType.HORSE: ('傌', '馬'),
    PieceType.CANNON: ('炮', '包'),
    PieceType.SOLDIER: ('兵', '卒'),
}

# FEN记法中的棋子符号（红方大写，黑方小写）
FEN_SYMBOLS = {
    PieceType.GENERAL: 'K',
    PieceType.ADVISOR: 'A',
    PieceType.ELEPHANT: 'B',
    PieceType.HORSE: 'N',
    PieceType.CHARIOT: 'R',
    PieceType.CANNON: 'C',
    PieceType.SOLDIER: 'P',
}

# 每方各类棋子的初始数量
INITIAL_PIECE_COUNTS = {
    PieceType.GENERAL: 1,
    PieceType.ADVISOR: 2,
    PieceType.ELEPHANT: 2,
    PieceType.HORSE: 2,
    PieceType.CHARIOT: 2,
    PieceType.CANNON: 2,
    PieceType.SOLDIER: 5,
}


def piece_text(piece_type: PieceType, side: PlayerSide) -> str:
    """获取棋子的显示文字"""
    red_text, black_text = PIECE_TEXTS[piece_type]
    return red_text if side is PlayerSide.RED else black_text


@dataclass(frozen=True)
class Piece:
    """
    棋子

    棋盘只保存整数编码，对外返回的 Piece 都是快照，修改不会影响棋盘。
    """
    piece_type: PieceType
    side: PlayerSide
    position: Position

    def __post_init__(self):
        # 允许直接传入普通元组
        if not isinstance(self.position, Position):
            object.__setattr__(self, 'position', Position(*self.position))

    @property
    def code(self) -> int:
        """棋盘矩阵中的编码：红方为正，黑方为负"""
        return int(self.piece_type) * int(self.side)

    @property
    def glyph(self) -> str:
        return piece_text(self.piece_type, self.side)

    @property
    def fen_symbol(self) -> str:
        symbol = FEN_SYMBOLS[self.piece_type]
        return symbol if self.side is PlayerSide.RED else symbol.lower()

    @classmethod
    def from_code(cls, code: int, position: Tuple[int, int]) -> 'Piece':
        """从棋盘编码创建棋子"""
        if code == 0:
            raise ValueError("编码0表示空位")
        side = PlayerSide.RED if code > 0 else PlayerSide.BLACK
        return cls(PieceType(abs(int(code))), side, Position(*position))

    def moved_to(self, position: Tuple[int, int]) -> 'Piece':
        """返回移动到新位置后的棋子快照"""
        return Piece(self.piece_type, self.side, Position(*position))

    def __str__(self) -> str:
        return f"{self.glyph}{tuple(self.position)}"


def _back_rank() -> List[PieceType]:
    return [
        PieceType.CHARIOT, PieceType.HORSE, PieceType.ELEPHANT, PieceType.ADVISOR,
        PieceType.GENERAL,
        PieceType.ADVISOR, PieceType.ELEPHANT, PieceType.HORSE, PieceType.CHARIOT,
    ]


def initial_pieces() -> List[Piece]:
    """
    标准开局布局

    Returns:
        List[Piece]: 双方共32枚棋子
    """
    pieces = []
    for side, back_y, cannon_y, soldier_y in (
        (PlayerSide.BLACK, 0, 2, 3),
        (PlayerSide.RED, 9, 7, 6),
    ):
        for x, piece_type in enumerate(_back_rank()):
            pieces.append(Piece(piece_type, side, Position(x, back_y)))
        for x in (1, 7):
            pieces.append(Piece(PieceType.CANNON, side, Position(x, cannon_y)))
        for x in (0, 2, 4, 6, 8):
            pieces.append(Piece(PieceType.SOLDIER, side, Position(x, soldier_y)))
    return pieces
