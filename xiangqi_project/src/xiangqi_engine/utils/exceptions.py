"""
异常定义

定义象棋规则引擎的各种异常类型。
"""


class XiangqiError(Exception):
    """
    象棋引擎基础异常

    所有象棋引擎相关异常的基类。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class IllegalMoveError(XiangqiError):
    """
    非法走法异常

    当走法不在当前合法走法集合中时抛出，调用方应重新获取合法走法。
    """

    def __init__(self, move_str: str, reason: str = ""):
        message = f"非法走法: {move_str}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "ILLEGAL_MOVE")
        self.move_str = move_str
        self.reason = reason


class GameOverError(XiangqiError):
    """
    对局已结束异常

    在终局状态下继续走子时抛出。
    """

    def __init__(self, result: str, reason: str = ""):
        message = f"对局已结束: {result}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_OVER")
        self.result = result
        self.reason = reason


class NoHistoryError(XiangqiError):
    """没有可悔的走法"""

    def __init__(self, reason: str = ""):
        message = "走法历史为空，无法悔棋"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "NO_HISTORY")
        self.reason = reason


class GeneralNotFoundError(XiangqiError):
    """
    找不到帅/将异常

    查询已被吃掉的帅/将时抛出，正常流程中不应出现。
    """

    def __init__(self, side: str):
        super().__init__(f"棋盘上找不到{side}的帅/将", "NOT_FOUND")
        self.side = side


class InvalidLineError(XiangqiError):
    """两点不在同一直线上（内部几何调用错误）"""

    def __init__(self, from_pos, to_pos):
        super().__init__(f"两点不共线: {tuple(from_pos)} -> {tuple(to_pos)}", "INVALID_LINE")
        self.from_pos = from_pos
        self.to_pos = to_pos


class GameStateError(XiangqiError):
    """
    游戏状态异常

    当棋局状态无效或不一致时抛出。
    """

    def __init__(self, state_description: str, reason: str = ""):
        message = f"游戏状态错误: {state_description}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_STATE_ERROR")
        self.state_description = state_description
        self.reason = reason


class NotationError(XiangqiError):
    """FEN或坐标记法解析失败"""

    def __init__(self, notation: str, reason: str = ""):
        message = f"无效的记法: {notation}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "NOTATION_ERROR")
        self.notation = notation
        self.reason = reason


class ConfigurationError(XiangqiError):
    """
    配置错误异常

    当配置参数无效时抛出。
    """

    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason
