"""
走法生成器

按棋子类型生成伪合法走法（符合走子规则与占位规则，但尚未排除送将）。
棋子类型到生成函数的对应关系通过查找表 MOVE_GENERATORS 完成。
"""

from typing import Callable, Dict, Iterator, Tuple

from .board import Board
from .geometry import (
    DIAGONAL_DIRECTIONS, ORTHOGONAL_DIRECTIONS,
    diagonal_step, forward, has_crossed_river, is_in_bounds, is_in_palace, is_on_own_side
)
from .move import Move
from .pieces import Piece, PieceType, PlayerSide, Position


# 马：日字走法及对应的马腿偏移
HORSE_MOVES = (
    ((2, 1), (1, 0)), ((2, -1), (1, 0)),
    ((-2, 1), (-1, 0)), ((-2, -1), (-1, 0)),
    ((1, 2), (0, 1)), ((-1, 2), (0, 1)),
    ((1, -2), (0, -1)), ((-1, -2), (0, -1)),
)


def _make_move(board: Board, piece: Piece, to_pos: Tuple[int, int]) -> Move:
    return Move(
        from_pos=piece.position,
        to_pos=to_pos,
        piece=piece,
        captured_piece=board.piece_at(to_pos),
    )


def _can_land(board: Board, to_pos: Tuple[int, int], side: PlayerSide) -> bool:
    """目标在棋盘内且不是己方棋子"""
    return is_in_bounds(to_pos) and not board.is_own_piece(to_pos, side)


def _general_moves(board: Board, piece: Piece) -> Iterator[Move]:
    """帅/将：九宫内直走一步"""
    x, y = piece.position
    for dx, dy in ORTHOGONAL_DIRECTIONS:
        target = Position(x + dx, y + dy)
        if is_in_palace(target, piece.side) and not board.is_own_piece(target, piece.side):
            yield _make_move(board, piece, target)


def _advisor_moves(board: Board, piece: Piece) -> Iterator[Move]:
    """仕/士：九宫内斜走一步"""
    for direction in DIAGONAL_DIRECTIONS:
        target = diagonal_step(piece.position, direction)
        if is_in_palace(target, piece.side) and not board.is_own_piece(target, piece.side):
            yield _make_move(board, piece, target)


def _elephant_moves(board: Board, piece: Piece) -> Iterator[Move]:
    """相/象：斜走两步，塞象眼则不能走，不能过河"""
    for direction in DIAGONAL_DIRECTIONS:
        target = diagonal_step(piece.position, direction, 2)
        if not is_in_bounds(target) or not is_on_own_side(target, piece.side):
            continue
        eye = diagonal_step(piece.position, direction)
        if not board.is_empty(eye):
            continue
        if not board.is_own_piece(target, piece.side):
            yield _make_move(board, piece, target)


def _horse_moves(board: Board, piece: Piece) -> Iterator[Move]:
    """马：走日字，马腿被绊则不能走"""
    x, y = piece.position
    for (dx, dy), (leg_dx, leg_dy) in HORSE_MOVES:
        target = Position(x + dx, y + dy)
        if not _can_land(board, target, piece.side):
            continue
        if board.is_empty((x + leg_dx, y + leg_dy)):
            yield _make_move(board, piece, target)


def _chariot_moves(board: Board, piece: Piece) -> Iterator[Move]:
    """车：直线任意步，遇子即停，敌子可吃"""
    x, y = piece.position
    for dx, dy in ORTHOGONAL_DIRECTIONS:
        target = Position(x + dx, y + dy)
        while is_in_bounds(target):
            if board.is_empty(target):
                yield _make_move(board, piece, target)
            else:
                if board.is_enemy_piece(target, piece.side):
                    yield _make_move(board, piece, target)
                break
            target = Position(target.x + dx, target.y + dy)


def _cannon_moves(board: Board, piece: Piece) -> Iterator[Move]:
    """炮：不吃子时中间不能有子；吃子时中间恰好隔一子（炮架）"""
    x, y = piece.position
    for dx, dy in ORTHOGONAL_DIRECTIONS:
        screened = False
        target = Position(x + dx, y + dy)
        while is_in_bounds(target):
            if not screened:
                if board.is_empty(target):
                    yield _make_move(board, piece, target)
                else:
                    screened = True
            elif not board.is_empty(target):
                if board.is_enemy_piece(target, piece.side):
                    yield _make_move(board, piece, target)
                break
            target = Position(target.x + dx, target.y + dy)


def _soldier_moves(board: Board, piece: Piece) -> Iterator[Move]:
    """兵/卒：未过河只能前进一步，过河后可前进或横走一步，永不后退"""
    x, y = piece.position
    steps = [(0, forward(piece.side))]
    if has_crossed_river(piece.position, piece.side):
        steps += [(-1, 0), (1, 0)]
    for dx, dy in steps:
        target = Position(x + dx, y + dy)
        if _can_land(board, target, piece.side):
            yield _make_move(board, piece, target)


MOVE_GENERATORS: Dict[PieceType, Callable[[Board, Piece], Iterator[Move]]] = {
    PieceType.GENERAL: _general_moves,
    PieceType.ADVISOR: _advisor_moves,
    PieceType.ELEPHANT: _elephant_moves,
    PieceType.HORSE: _horse_moves,
    PieceType.CHARIOT: _chariot_moves,
    PieceType.CANNON: _cannon_moves,
    PieceType.SOLDIER: _soldier_moves,
}


def generate_piece_moves(board: Board, pos: Tuple[int, int]) -> Iterator[Move]:
    """
    生成指定位置棋子的所有伪合法走法

    Args:
        board: 当前棋盘（只读）
        pos: 棋子位置

    Returns:
        Iterator[Move]: 走法生成器，空位时为空
    """
    piece = board.piece_at(pos)
    if piece is None:
        return iter(())
    return MOVE_GENERATORS[piece.piece_type](board, piece)


def generate_pseudo_legal_moves(board: Board, side: PlayerSide) -> Iterator[Move]:
    """
    生成指定一方的所有伪合法走法

    每次调用都返回新的生成器，不保留任何迭代状态；遍历期间不得修改棋盘。

    Args:
        board: 当前棋盘（只读）
        side: 走子方

    Returns:
        Iterator[Move]: 走法生成器
    """
    for piece in list(board.pieces(side)):
        yield from MOVE_GENERATORS[piece.piece_type](board, piece)
