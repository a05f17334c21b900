"""
Xiangqi Engine 源代码模块

- xiangqi_engine: 象棋规则引擎与对局接口
"""

from . import xiangqi_engine

__all__ = [
    "xiangqi_engine",
]
