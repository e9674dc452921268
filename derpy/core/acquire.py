"""依赖获取状态机

根据工作副本是否存在与请求的获取模式，决定并执行以下之一：
首次拉取 / 锁定到指定版本 / 升级到最新 / 不做任何事，并返回结构化结果。

    工作副本  | Acquire        | LockTo(v)                 | Upgrade
    ----------+----------------+---------------------------+--------------------------
    存在      | Ignored        | NoChange 或 checkout →    | upgrade → UpgradedTo
              |                | Restored                  | 或 NoChange
    不存在    | acquire →      | NonsenseAcquireModeError  | NonsenseAcquireModeError
              | Acquired       |                           |

每次调用互不影响，不保留任何状态。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NoReturn, Union

from derpy.core.exceptions import NonsenseAcquireModeError
from derpy.core.models import Dependency
from derpy.core.vcs import VcsBackend, VcsRegistry
from derpy.utils.path_utils import ensure_dir
from derpy.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


# =========================================================================
# 获取模式
# =========================================================================


@dataclass(frozen=True)
class Acquire:
    """不存在则拉取，存在则忽略"""

    def __str__(self) -> str:
        return "Acquire"


@dataclass(frozen=True)
class LockTo:
    """锁定到指定版本"""

    version: str

    def __str__(self) -> str:
        return f"LockTo({self.version})"


@dataclass(frozen=True)
class Upgrade:
    """升级到后端的最新版本"""

    def __str__(self) -> str:
        return "Upgrade"


AcquireMode = Union[Acquire, LockTo, Upgrade]


# =========================================================================
# 获取结果
# =========================================================================


@dataclass(frozen=True)
class Acquired:
    at_version: str


@dataclass(frozen=True)
class Restored:
    from_version: str
    to_version: str


@dataclass(frozen=True)
class UpgradedTo:
    from_version: str
    to_version: str


@dataclass(frozen=True)
class NoChange:
    current_version: str


@dataclass(frozen=True)
class Ignored:
    at_version: str


AcquireOutcome = Union[Acquired, Restored, UpgradedTo, NoChange, Ignored]


def assert_never(value: NoReturn) -> NoReturn:
    """穷举检查：新增变体而调用处未处理时，类型检查会在此报错"""
    raise TypeError(f"未处理的变体: {value!r}")


# =========================================================================
# 状态机
# =========================================================================


def acquire(
    dep: Dependency,
    mode: AcquireMode,
    *,
    registry: VcsRegistry | None = None,
    executor: CommandExecutor | None = None,
) -> AcquireOutcome:
    """把单个依赖的工作副本带到 mode 要求的状态

    Raises:
        UnknownVcsError: 没有 dep.vcs 对应的描述文件
        FailedToCreateDirectoryError: 无法创建 dep.target
        NonsenseAcquireModeError: 工作副本不存在却请求锁定或升级
        以及命令执行过程中的 MacroExpansionError / UnableToChangeDirError /
        SubprocessError / VcsCommandFailedError
    """
    registry = registry or VcsRegistry()
    backend = VcsBackend(registry.get(dep.vcs), executor=executor)

    ensure_dir(dep.target)

    if dep.full_path.is_dir():
        current = backend.get_version_of(dep)
        logger.debug("'%s' 已存在，当前版本 %s", dep.name, current)
        return _acquire_present(backend, dep, mode, current)

    if isinstance(mode, Acquire):
        logger.info("拉取 '%s' (%s)", dep.name, dep.url)
        backend.acquire(dep)
        return Acquired(at_version=backend.get_version_of(dep))
    if isinstance(mode, (LockTo, Upgrade)):
        raise NonsenseAcquireModeError(dep.name, mode)
    assert_never(mode)


def _acquire_present(
    backend: VcsBackend, dep: Dependency, mode: AcquireMode, current: str,
) -> AcquireOutcome:
    if isinstance(mode, Acquire):
        return Ignored(at_version=current)
    if isinstance(mode, LockTo):
        if current == mode.version:
            return NoChange(current_version=current)
        logger.info("'%s': %s -> %s", dep.name, current, mode.version)
        backend.checkout(dep, mode.version)
        return Restored(from_version=current, to_version=mode.version)
    if isinstance(mode, Upgrade):
        backend.upgrade(dep)
        new_version = backend.get_version_of(dep)
        if new_version != current:
            return UpgradedTo(from_version=current, to_version=new_version)
        return NoChange(current_version=current)
    assert_never(mode)
