"""
中国象棋规则引擎 (Xiangqi Engine)

一个中国象棋走法合法性与对局状态引擎，包含规则引擎、对局会话和命令行工具。
"""

__version__ = "0.1.0"
__author__ = "Xiangqi Engine Team"
__description__ = "中国象棋规则引擎 - 走法生成、将军检测、终局判定与对局会话"

# 导入主要模块
from xiangqi_project.src import xiangqi_engine

__all__ = [
    "xiangqi_engine",
    "__version__",
    "__author__",
    "__description__",
]
