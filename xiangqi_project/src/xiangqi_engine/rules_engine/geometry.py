"""
棋盘几何规则

九宫、河界范围判断以及直线路径计算，全部为无状态的纯函数。
"""

from typing import TYPE_CHECKING, Tuple

from .pieces import PlayerSide, Position
from ..utils.exceptions import InvalidLineError

if TYPE_CHECKING:
    from .board import Board


BOARD_COLUMNS = 9
BOARD_ROWS = 10

# 九宫范围
PALACE_X_RANGE = (3, 5)
BLACK_PALACE_Y_RANGE = (0, 2)
RED_PALACE_Y_RANGE = (7, 9)

# 河界：黑方一侧的最后一行与红方一侧的第一行
BLACK_RIVER_LINE = 4
RED_RIVER_LINE = 5

ORTHOGONAL_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONAL_DIRECTIONS = ((1, 1), (-1, 1), (1, -1), (-1, -1))


def is_in_bounds(pos: Tuple[int, int]) -> bool:
    x, y = pos
    return 0 <= x < BOARD_COLUMNS and 0 <= y < BOARD_ROWS


def is_in_palace(pos: Tuple[int, int], side: PlayerSide) -> bool:
    """
    判断坐标是否在指定一方的九宫内

    Args:
        pos: 坐标 (x, y)
        side: 对弈方

    Returns:
        bool: 是否在九宫内
    """
    x, y = pos
    if not PALACE_X_RANGE[0] <= x <= PALACE_X_RANGE[1]:
        return False
    min_y, max_y = RED_PALACE_Y_RANGE if side is PlayerSide.RED else BLACK_PALACE_Y_RANGE
    return min_y <= y <= max_y


def is_on_own_side(pos: Tuple[int, int], side: PlayerSide) -> bool:
    """判断坐标是否在己方河界以内"""
    y = pos[1]
    if side is PlayerSide.RED:
        return RED_RIVER_LINE <= y < BOARD_ROWS
    return 0 <= y <= BLACK_RIVER_LINE


def has_crossed_river(pos: Tuple[int, int], side: PlayerSide) -> bool:
    return not is_on_own_side(pos, side)


def forward(side: PlayerSide) -> int:
    """兵/卒前进方向的行增量：红方向上 (-1)，黑方向下 (+1)"""
    return -1 if side is PlayerSide.RED else 1


def diagonal_step(from_pos: Tuple[int, int], direction: Tuple[int, int], distance: int = 1) -> Position:
    """
    沿斜线方向走若干步，不做边界检查（由调用方验证）

    Args:
        from_pos: 起点
        direction: 斜线方向，如 (1, -1)
        distance: 步数，仕为1，相/象为2
    """
    dx, dy = direction
    if abs(dx) != 1 or abs(dy) != 1:
        raise ValueError(f"不是斜线方向: {direction}")
    return Position(from_pos[0] + dx * distance, from_pos[1] + dy * distance)


def line_step(from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> Tuple[int, int]:
    """两点所在直线上的单位步长，两点不共线时抛出 InvalidLineError"""
    fx, fy = from_pos
    tx, ty = to_pos
    if (fx != tx and fy != ty) or (fx == tx and fy == ty):
        raise InvalidLineError(from_pos, to_pos)
    return (tx > fx) - (tx < fx), (ty > fy) - (ty < fy)


def count_pieces_between(board: 'Board', from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> int:
    """
    统计同一行或同一列上两点之间（不含端点）的棋子数

    Args:
        board: 棋盘
        from_pos: 起点
        to_pos: 终点

    Returns:
        int: 中间的棋子数

    Raises:
        InvalidLineError: 两点不在同一行或同一列
    """
    dx, dy = line_step(from_pos, to_pos)
    x, y = from_pos[0] + dx, from_pos[1] + dy
    count = 0
    while (x, y) != tuple(to_pos):
        if not board.is_empty((x, y)):
            count += 1
        x += dx
        y += dy
    return count
