"""
日志系统

所有记录器都挂在 'xiangqi' 之下：规则引擎各类通过 LoggerMixin 取得子记录器，
命令行按 SystemConfig 配置控制台和轮转文件输出，界面可以用
set_external_logger 接收 {text, color, tag} 形式的日志。
"""

import json
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Callable, List, Optional


ROOT_LOGGER_NAME = 'xiangqi'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
CALLBACK_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# 各日志级别在外部日志框中的显示颜色
LEVEL_COLORS = {
    logging.DEBUG: 'gray',
    logging.INFO: 'white',
    logging.WARNING: 'yellow',
    logging.ERROR: 'red',
    logging.CRITICAL: 'red',
}


def _level_of(level: str) -> int:
    return getattr(logging, str(level).upper(), logging.INFO)


def _build_handlers(
    log_file: Optional[str],
    log_dir: str,
    max_size: int,
    backup_count: int,
    console_output: bool
) -> List[logging.Handler]:
    """按需创建控制台处理器和轮转文件处理器"""
    handlers = []
    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=log_path / log_file,
            maxBytes=max_size * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        ))
    return handlers


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: str = 'logs/xiangqi_engine',
    max_size: int = 10,  # MB
    backup_count: int = 5,
    console_output: bool = True
) -> logging.Logger:
    """
    配置记录器的级别和输出

    已有输出处理器的记录器不会重复添加处理器，只更新级别。

    Args:
        name: 记录器名称
        level: 级别名称，如 'DEBUG'、'INFO'
        log_file: 日志文件名，为空时不写文件
        log_dir: 日志文件所在目录
        max_size: 单个日志文件的最大大小(MB)
        backup_count: 轮转保留的文件数
        console_output: 是否输出到标准输出

    Returns:
        logging.Logger: 配置好的记录器
    """
    logger = logging.getLogger(name)
    log_level = _level_of(level)
    logger.setLevel(log_level)

    if any(not isinstance(h, CallbackHandler) for h in logger.handlers):
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file, log_dir, max_size, backup_count, console_output):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def configure_logging(system_config, debug: bool = False) -> logging.Logger:
    """
    按系统配置设置 'xiangqi' 根记录器

    调试模式下级别为 DEBUG 并输出到控制台，否则只按配置写日志文件。

    Args:
        system_config: SystemConfig 实例
        debug: 命令行是否要求调试模式
    """
    debug = debug or system_config.enable_debug_mode
    return setup_logger(
        level='DEBUG' if debug else system_config.log_level,
        log_file=system_config.log_file or None,
        log_dir=system_config.log_dir,
        max_size=system_config.log_max_size,
        backup_count=system_config.log_backup_count,
        console_output=debug
    )


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)


class CallbackHandler(logging.Handler):
    """
    回调日志处理器

    把每条日志封装为 {text, color, tag} 的JSON字符串交给外部回调。
    回调本身抛出的异常只会被报告到 stderr，不会影响日志流程。
    """

    def __init__(self, callback: Callable[[str], None], level: int = logging.INFO):
        super().__init__(level)
        self.callback = callback
        self.setFormatter(logging.Formatter(fmt=CALLBACK_FORMAT, datefmt=DATE_FORMAT))

    def to_payload(self, record: logging.LogRecord) -> str:
        """把日志记录转换为JSON字符串"""
        payload = {
            'text': self.format(record),
            'color': LEVEL_COLORS.get(record.levelno, 'white'),
            'tag': f"tag_{record.levelname.lower()}",
        }
        return json.dumps(payload, ensure_ascii=False)

    def emit(self, record: logging.LogRecord):
        try:
            self.callback(self.to_payload(record))
        except Exception:
            self.handleError(record)


def set_external_logger(
    callback: Callable[[str], None],
    name: str = ROOT_LOGGER_NAME,
    enable_debug: bool = False
) -> CallbackHandler:
    """
    安装外部日志回调

    同一个日志记录器上只保留一个回调处理器，重复调用会替换旧的回调。
    调试日志只有在 enable_debug 为真时才会转发。

    Returns:
        CallbackHandler: 新安装的处理器
    """
    logger = get_logger(name)
    for handler in list(logger.handlers):
        if isinstance(handler, CallbackHandler):
            logger.removeHandler(handler)

    level = logging.DEBUG if enable_debug else logging.INFO
    handler = CallbackHandler(callback, level)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return handler


class LoggerMixin:
    """为规则引擎中的类提供 'xiangqi.<类名>' 子记录器"""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(f'{ROOT_LOGGER_NAME}.{type(self).__name__}')

    def log_debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)

    def log_info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def log_warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def log_error(self, message: str, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)
