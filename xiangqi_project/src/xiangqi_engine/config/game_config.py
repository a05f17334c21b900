"""
配置数据结构

定义对局配置、系统配置和默认参数。
"""

from dataclasses import dataclass


@dataclass
class GameConfig:
    """对局配置"""
    # 对局规则
    draw_by_repetition: bool = True     # 是否启用重复局面和棋
    repetition_limit: int = 3           # 同一局面出现多少次判和
    allow_undo: bool = True             # 是否允许悔棋

    # 时间控制
    initial_time: float = 600.0         # 每方初始用时(秒)

    # 玩家
    red_player_name: str = '红方'
    black_player_name: str = '黑方'


@dataclass
class SystemConfig:
    """系统配置"""
    # 日志配置
    log_level: str = 'INFO'             # 日志级别
    log_file: str = ''                  # 日志文件，为空时不写文件
    log_dir: str = 'logs'               # 日志目录
    log_max_size: int = 10              # 日志文件最大大小(MB)
    log_backup_count: int = 5           # 日志备份数量
    console_output: bool = True         # 是否输出到控制台

    # 调试
    enable_debug_mode: bool = False     # 是否输出调试日志
    current_user: str = ''              # 当前用户名


# 默认配置实例
DEFAULT_GAME_CONFIG = GameConfig()
DEFAULT_SYSTEM_CONFIG = SystemConfig()
