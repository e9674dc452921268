"""集中配置管理

提供清单文件名、锁文件名、默认依赖目录、VCS 描述目录的统一入口。
支持从 YAML 文件加载 + 环境变量覆盖。
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

from derpy.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

VCS_INFO_DIR_ENV = "DERPY_VCS_INFO_DIR"


def install_dir() -> Path:
    """derpy 包安装目录（随包分发的 vcs_info/ 位于其中）"""
    return Path(__file__).resolve().parent.parent


@dataclass
class Config:
    """全局配置"""

    config_file: str = "derpy.yml"
    lock_file: str = "derpy.lock.yml"
    dependency_dir: str = "deps/"
    vcs_info_dir: str = ""  # 为空时使用包内 vcs_info/

    # 放不到字段里的配置项
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def resolve_vcs_info_dir(self) -> Path:
        """VCS 描述目录：环境变量 > 配置项 > 包内默认目录"""
        override = os.getenv(VCS_INFO_DIR_ENV, "") or self.vcs_info_dir
        if override:
            return Path(override)
        return install_dir() / "vcs_info"

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current


def reset_config() -> None:
    """恢复为默认配置"""
    global _current  # noqa: PLW0603
    _current = None
