"""
玩家与计时器

每位玩家持有一个倒计时器，走子方的计时器运行，另一方暂停。
"""

import time
from typing import Callable, List, Optional

from ..rules_engine.pieces import PlayerSide


class PlayerTimer:
    """
    玩家倒计时器

    剩余时间在读取时根据时钟计算，不依赖后台线程。时钟可注入，便于测试。
    """

    def __init__(self, initial_time: float, clock: Callable[[], float] = time.monotonic):
        """
        初始化计时器

        Args:
            initial_time: 总时间(秒)
            clock: 返回当前时间(秒)的单调时钟
        """
        if initial_time < 0:
            raise ValueError(f"初始时间不能为负: {initial_time}")

        self._clock = clock
        self.total_time = float(initial_time)
        self._time_left = float(initial_time)
        self._started_at: Optional[float] = None
        self._callbacks: List[Callable[[float], None]] = []

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    @property
    def time_left(self) -> float:
        """剩余时间(秒)，不会小于0"""
        if self._started_at is None:
            return self._time_left
        elapsed = self._clock() - self._started_at
        return max(0.0, self._time_left - elapsed)

    @property
    def is_expired(self) -> bool:
        return self.time_left <= 0

    def on_time_updated(self, callback: Callable[[float], None]):
        """注册剩余时间变化的回调，回调参数为剩余秒数"""
        self._callbacks.append(callback)

    def start(self):
        """开始计时，已在运行或时间已用完时不做任何事"""
        if not self.is_running and self._time_left > 0:
            self._started_at = self._clock()

    def stop(self):
        """暂停计时并结算已用时间"""
        if self.is_running:
            self._time_left = self.time_left
            self._started_at = None
            self._notify()

    def reset(self):
        """停止并恢复为总时间"""
        self._started_at = None
        self._time_left = self.total_time
        self._notify()

    def set(self, seconds: float):
        """重新设定总时间和剩余时间"""
        if seconds < 0:
            raise ValueError(f"时间不能为负: {seconds}")
        self.total_time = float(seconds)
        self._time_left = float(seconds)
        if self.is_running:
            self._started_at = self._clock()
        self._notify()

    def tick(self) -> float:
        """
        刷新剩余时间

        供界面定时调用。时间用完时自动停止。

        Returns:
            float: 当前剩余时间
        """
        left = self.time_left
        if self.is_running and left <= 0:
            self._time_left = 0.0
            self._started_at = None
        self._notify()
        return left

    def _notify(self):
        left = self.time_left
        for callback in self._callbacks:
            callback(left)

    def __repr__(self) -> str:
        state = "running" if self.is_running else "stopped"
        return f"PlayerTimer({self.time_left:.1f}/{self.total_time:.1f}s, {state})"


class Player:
    """对局中的一方，包括其计时器"""

    def __init__(
        self,
        side: PlayerSide,
        initial_time: float,
        name: str = "",
        clock: Callable[[], float] = time.monotonic
    ):
        self.side = side
        self.name = name or side.display_name
        self.timer = PlayerTimer(initial_time, clock)

    def to_dict(self):
        return {
            'side': self.side.name.lower(),
            'name': self.name,
            'time_left': round(self.timer.time_left, 3),
            'total_time': self.timer.total_time,
            'timer_running': self.timer.is_running
        }

    def __repr__(self) -> str:
        return f"Player({self.side.name}, {self.name!r}, {self.timer!r})"
