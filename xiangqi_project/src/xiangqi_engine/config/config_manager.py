"""
配置管理器

负责加载、保存和管理各种配置。
"""

import json
import logging
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import yaml

from .game_config import GameConfig, SystemConfig, DEFAULT_GAME_CONFIG, DEFAULT_SYSTEM_CONFIG
from ..utils.exceptions import ConfigurationError

T = TypeVar('T')

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    配置管理器

    负责加载、保存和管理系统的各种配置。
    """

    def __init__(self, config_dir: str = "xiangqi_project/configs", create_defaults: bool = True):
        """
        初始化配置管理器

        Args:
            config_dir: 配置文件目录
            create_defaults: 是否为缺失的配置文件写入默认值
        """
        self.config_dir = Path(config_dir)

        self.config_files = {
            'game': self.config_dir / 'game_config.yaml',
            'system': self.config_dir / 'system_config.yaml'
        }

        self.default_configs = {
            'game': DEFAULT_GAME_CONFIG,
            'system': DEFAULT_SYSTEM_CONFIG
        }

        self.config_types = {
            'game': GameConfig,
            'system': SystemConfig
        }

        if create_defaults:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self._initialize_default_configs()

    def _initialize_default_configs(self):
        """初始化默认配置文件"""
        for config_name, config_obj in self.default_configs.items():
            config_file = self.config_files[config_name]
            if not config_file.exists():
                self.save_config(config_name, config_obj)
                logger.info(f"创建默认配置文件: {config_file}")

    def load_config(self, config_name: str, config_class: Type[T]) -> T:
        """
        加载配置

        文件不存在或无法解析时记录警告并返回默认配置的副本。

        Args:
            config_name: 配置名称
            config_class: 配置类

        Returns:
            配置对象
        """
        if config_name not in self.config_files:
            raise ConfigurationError(config_name, "未知的配置名称")

        config_file = self.config_files[config_name]
        if not config_file.exists():
            logger.warning(f"配置文件不存在: {config_file}，使用默认配置")
            return replace(self.default_configs[config_name])

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix == '.yaml':
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)

            config = self._dict_to_dataclass(data, config_class)
            logger.info(f"成功加载配置: {config_file}")
            return config

        except (OSError, yaml.YAMLError, json.JSONDecodeError, TypeError, AttributeError) as e:
            logger.error(f"加载配置文件失败: {config_file}, 错误: {e}")
            return replace(self.default_configs[config_name])

    def save_config(self, config_name: str, config_obj: Any):
        """
        保存配置

        Args:
            config_name: 配置名称
            config_obj: 配置对象
        """
        config_file = self.config_files.get(config_name)
        if not config_file:
            raise ConfigurationError(config_name, "未知的配置名称")

        data = asdict(config_obj)
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, 'w', encoding='utf-8') as f:
            if config_file.suffix == '.yaml':
                yaml.dump(data, f, default_flow_style=False,
                          allow_unicode=True, indent=2)
            else:
                json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info(f"成功保存配置: {config_file}")

    def get_game_config(self) -> GameConfig:
        """获取对局配置"""
        return self.load_config('game', GameConfig)

    def get_system_config(self) -> SystemConfig:
        """获取系统配置"""
        return self.load_config('system', SystemConfig)

    def update_config(self, config_name: str, **kwargs):
        """
        更新配置

        Args:
            config_name: 配置名称
            **kwargs: 要更新的配置项
        """
        config_class = self.config_types[config_name]
        config = self.load_config(config_name, config_class)

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"配置项不存在: {key}")

        self.save_config(config_name, config)
        return config

    def reset_config(self, config_name: str):
        """重置配置为默认值"""
        self.save_config(config_name, self.default_configs[config_name])
        logger.info(f"配置已重置为默认值: {config_name}")

    def validate_config(self, config_name: str) -> bool:
        """
        验证配置的有效性

        Args:
            config_name: 配置名称

        Returns:
            bool: 配置是否有效
        """
        config = self.load_config(config_name, self.config_types[config_name])

        if config_name == 'game':
            return config.repetition_limit >= 2 and config.initial_time > 0
        elif config_name == 'system':
            return (config.log_level.upper() in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
                    and config.log_max_size > 0
                    and config.log_backup_count >= 0)

        return True

    def get_all_configs(self) -> Dict[str, Any]:
        """获取所有配置"""
        return {name: self.load_config(name, config_class)
                for name, config_class in self.config_types.items()}

    def export_configs(self, export_path: str):
        """
        导出所有配置到文件

        Args:
            export_path: 导出文件路径，后缀为 .yaml 时导出YAML，否则导出JSON
        """
        export_data = {name: asdict(config) for name, config in self.get_all_configs().items()}

        export_file = Path(export_path)
        with open(export_file, 'w', encoding='utf-8') as f:
            if export_file.suffix == '.yaml':
                yaml.dump(export_data, f, default_flow_style=False,
                          allow_unicode=True, indent=2)
            else:
                json.dump(export_data, f, ensure_ascii=False, indent=2)

        logger.info(f"配置已导出到: {export_path}")

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """将字典转换为数据类对象，忽略未知字段"""
        field_names = {f.name for f in fields(dataclass_type)}
        filtered_data = {k: v for k, v in data.items() if k in field_names}
        return dataclass_type(**filtered_data)
