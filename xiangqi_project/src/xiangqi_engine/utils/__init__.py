"""
工具模块

包含日志、异常处理和其他通用工具。
"""

from .logger import (
    setup_logger, configure_logging, get_logger, set_external_logger, CallbackHandler, LoggerMixin
)
from .exceptions import (
    XiangqiError, IllegalMoveError, GameOverError, NoHistoryError,
    GeneralNotFoundError, InvalidLineError, GameStateError, NotationError,
    ConfigurationError
)

__all__ = [
    'setup_logger', 'configure_logging', 'get_logger', 'set_external_logger', 'CallbackHandler', 'LoggerMixin',
    'XiangqiError', 'IllegalMoveError', 'GameOverError', 'NoHistoryError',
    'GeneralNotFoundError', 'InvalidLineError', 'GameStateError', 'NotationError',
    'ConfigurationError'
]
