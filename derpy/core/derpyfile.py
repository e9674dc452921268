"""清单 / 锁文件读写"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from derpy.core.exceptions import ConfigError, ConfigNotFoundError
from derpy.core.models import DerpyFile
from derpy.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> DerpyFile:
    """读取清单文件，不存在时抛出 ConfigNotFoundError"""
    p = Path(path)
    if not p.is_file():
        raise ConfigNotFoundError(f"清单文件不存在: {p}（是否已执行 init?）")
    try:
        data = load_yaml(p)
    except yaml.YAMLError as e:
        raise ConfigError(f"无法解析清单文件 {p}: {e}") from e
    except (OSError, ValueError) as e:
        raise ConfigError(f"无法读取清单文件 {p}: {e}") from e
    return DerpyFile.from_dict(data)


def load_lock(path: str | Path) -> DerpyFile:
    """读取锁文件，不存在时返回空内容"""
    if not Path(path).is_file():
        return DerpyFile()
    return load_config(path)


def save_config(config: DerpyFile, path: str | Path) -> None:
    try:
        save_yaml(path, config.to_dict())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"无法写入文件 {path}: {e}") from e
    logger.debug("已写入 %s", path)
