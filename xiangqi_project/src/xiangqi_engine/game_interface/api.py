"""
对外接口

供界面或其他调用方使用的函数式接口，所有函数都直接作用于传入的 GameState。
"""

from typing import List, Optional

from ..rules_engine import GameResult, GameState, Move, PlayerSide


def new_game(**kwargs) -> GameState:
    """
    创建标准开局，红方先走

    Args:
        **kwargs: 传给 GameState 的选项，如 draw_by_repetition、repetition_limit
    """
    return GameState.new_game(**kwargs)


def legal_moves(state: GameState, side: Optional[PlayerSide] = None) -> List[Move]:
    """
    获取合法走法

    Args:
        state: 对局状态
        side: 指定一方，None 表示当前走子方

    Returns:
        List[Move]: 合法走法，终局后为空列表
    """
    return state.legal_moves(side)


def apply_move(state: GameState, move: Move) -> GameState:
    """
    执行走法

    Raises:
        GameOverError: 对局已结束
        IllegalMoveError: 走法不合法，状态保持不变
    """
    return state.apply_move(move)


def undo(state: GameState) -> GameState:
    """
    撤销上一步

    Raises:
        NoHistoryError: 没有走法可撤销
    """
    return state.undo()


def game_result(state: GameState) -> GameResult:
    return state.result
