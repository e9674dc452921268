"""路径工具 — 项目目录解析、目录创建、命令工作目录校验"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from derpy.core.exceptions import (
    FailedToCreateDirectoryError,
    UnableToChangeDirError,
    UnableToDetermineCurrentDirError,
)

logger = logging.getLogger(__name__)


def current_dir() -> Path:
    try:
        return Path(os.getcwd())
    except OSError as e:
        raise UnableToDetermineCurrentDirError(e) from e


def determine_cwd(override_path: str | None = None) -> Path:
    """确定视为项目根目录的路径

    未指定时使用进程当前目录；相对路径基于进程当前目录展开。
    """
    if not override_path:
        return current_dir()
    path = Path(override_path)
    if path.is_absolute():
        return path
    return current_dir() / path


def ensure_dir(path: str | Path) -> None:
    """递归创建目录（已存在则忽略）"""
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FailedToCreateDirectoryError(str(path), e) from e


def resolve_work_dir(path: str | Path) -> str:
    """校验命令的工作目录并返回其字符串形式

    命令在该目录中执行，但不修改进程级当前目录：
    目录以 cwd 参数传给子进程，失败时调用方目录保持不变。
    """
    p = Path(path)
    if not p.exists():
        raise UnableToChangeDirError(str(p), "目录不存在")
    if not p.is_dir():
        raise UnableToChangeDirError(str(p), "不是目录")
    logger.debug("entering dir %s", p)
    return str(p)
