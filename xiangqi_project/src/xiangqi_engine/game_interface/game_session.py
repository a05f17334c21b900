"""
对局会话管理

在对局状态之上加入双方玩家、计时器交接、悔棋开关和会话信息。
"""

import time
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from ..config.game_config import GameConfig
from ..rules_engine import GameState, Move, PlayerSide
from ..utils.exceptions import GameOverError, GameStateError, XiangqiError
from ..utils.logger import LoggerMixin
from .player import Player


class GameSession(LoggerMixin):
    """
    对局会话

    走子方的计时器运行，对方的计时器暂停。每次成功走子后交换计时；
    走子方超时后会话不再接受走法。
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        fen: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        初始化对局会话

        Args:
            config: 对局配置，None 时使用默认配置
            fen: 起始局面，None 表示标准开局
            clock: 计时器使用的时钟
        """
        self.config = config or GameConfig()
        self.session_id = str(uuid.uuid4())
        self.created_at = datetime.now()

        state_options = {
            'draw_by_repetition': self.config.draw_by_repetition,
            'repetition_limit': self.config.repetition_limit,
        }
        if fen:
            self.state = GameState.from_fen(fen, validate=True, **state_options)
        else:
            self.state = GameState.new_game(**state_options)

        self.players: Dict[PlayerSide, Player] = {
            PlayerSide.RED: Player(PlayerSide.RED, self.config.initial_time,
                                   self.config.red_player_name, clock),
            PlayerSide.BLACK: Player(PlayerSide.BLACK, self.config.initial_time,
                                     self.config.black_player_name, clock),
        }
        self.started = False

        self.log_info(f"创建新会话: {self.session_id}")

    # ==================== 查询 ====================

    @property
    def current_player(self) -> Player:
        return self.players[self.state.turn]

    @property
    def timed_out_side(self) -> Optional[PlayerSide]:
        """超时的一方，没有超时返回 None"""
        for side, player in self.players.items():
            if player.timer.is_expired:
                return side
        return None

    @property
    def is_over(self) -> bool:
        return self.state.is_over or self.timed_out_side is not None

    def legal_moves(self) -> List[Move]:
        if self.is_over:
            return []
        return self.state.legal_moves()

    # ==================== 操作 ====================

    def start(self):
        """开始对局，启动走子方的计时器"""
        if self.started:
            return
        self.started = True
        self.current_player.timer.start()
        self.log_info(f"对局开始: {self.session_id}")

    def make_move(self, move: Union[Move, str]) -> Move:
        """
        执行走法

        Args:
            move: Move对象或坐标记法字符串 (如 "b9c7")

        Returns:
            Move: 实际执行的走法，带有棋子和被吃棋子信息

        Raises:
            GameOverError: 对局已结束或走子方超时
            IllegalMoveError: 走法不合法
            NotationError: 坐标记法无法解析
        """
        if isinstance(move, str):
            move = Move.from_coordinate_notation(move)

        self._ensure_time_left()
        if not self.started:
            self.start()

        mover = self.current_player
        self.state.apply_move(move)
        applied = self.state.last_move

        mover.timer.stop()
        if self.state.is_over:
            self.log_info(f"会话 {self.session_id} 结束: {self.state.result}")
        else:
            self.current_player.timer.start()

        return applied

    def try_move(self, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
        """
        尝试走子

        起点无子、不是走子方的棋子、走法不合法或对局已结束时返回 False。

        Returns:
            bool: 是否走子成功
        """
        try:
            move = Move((from_x, from_y), (to_x, to_y))
            self.make_move(move)
            return True
        except (ValueError, XiangqiError) as e:
            self.log_debug(f"走子失败 ({from_x},{from_y})->({to_x},{to_y}): {e}")
            return False

    def undo(self) -> Move:
        """
        悔棋

        Returns:
            Move: 被撤销的走法

        Raises:
            GameStateError: 当前配置不允许悔棋
            NoHistoryError: 没有可撤销的走法
        """
        if not self.config.allow_undo:
            raise GameStateError("悔棋", "当前配置不允许悔棋")

        move = self.state.last_move
        self.state.undo()

        for player in self.players.values():
            player.timer.stop()
        if self.started:
            self.current_player.timer.start()

        self.log_info(f"悔棋: {move}")
        return move

    def reset(self):
        """重新开始：标准开局并重置双方计时器"""
        self.state = GameState.new_game(
            draw_by_repetition=self.config.draw_by_repetition,
            repetition_limit=self.config.repetition_limit
        )
        for player in self.players.values():
            player.timer.reset()
        self.started = False
        self.log_info(f"会话已重置: {self.session_id}")

    # ==================== 信息 ====================

    def status(self) -> Dict[str, Any]:
        """获取会话状态摘要"""
        result = self.state.result
        timed_out = self.timed_out_side
        return {
            'session_id': self.session_id,
            'created_at': self.created_at.isoformat(),
            'turn': self.state.turn.name.lower(),
            'move_count': self.state.move_count,
            'in_check': self.state.is_in_check(),
            'status': result.status.value,
            'winner': result.winner.name.lower() if result.winner else None,
            'timed_out': timed_out.name.lower() if timed_out else None,
            'fen': self.state.to_fen(),
            'moves': [m.to_coordinate_notation() for m in self.state.move_history],
            'players': {side.name.lower(): player.to_dict() for side, player in self.players.items()},
        }

    def _ensure_time_left(self):
        timed_out = self.timed_out_side
        if timed_out is not None:
            for player in self.players.values():
                player.timer.stop()
            raise GameOverError(f"{timed_out.display_name}超时", "计时已用完")
