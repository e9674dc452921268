"""依赖获取服务 — 批量 acquire / upgrade 与锁文件维护

锁文件只在整批依赖处理完成后写一次：
任一依赖失败时异常直接上抛，此前成功的结果不会写入锁文件，
已被命令修改的工作副本也不会回滚。
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path

from derpy.core.acquire import (
    Acquire,
    Acquired,
    AcquireMode,
    AcquireOutcome,
    Ignored,
    LockTo,
    NoChange,
    Restored,
    Upgrade,
    UpgradedTo,
    acquire,
    assert_never,
)
from derpy.core.config import get_config
from derpy.core.derpyfile import load_config, load_lock, save_config
from derpy.core.exceptions import ValidationError
from derpy.core.models import DerpyFile, Dependency
from derpy.core.vcs import VcsRegistry
from derpy.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


@dataclass
class AcquireReport:
    """一次批量获取的结果汇总"""

    outcomes: list[tuple[str, AcquireOutcome]] = field(default_factory=list)
    lock_updated: bool = False


def describe_outcome(name: str, outcome: AcquireOutcome) -> list[str]:
    """把获取结果格式化为面向用户的输出行"""
    if isinstance(outcome, Acquired):
        return [f"- acquired '{name}' at version {outcome.at_version}"]
    if isinstance(outcome, Restored):
        return [f"- restored '{name}' to {outcome.to_version} from {outcome.from_version}"]
    if isinstance(outcome, UpgradedTo):
        return [f"- upgraded '{name}' to {outcome.to_version} from {outcome.from_version}"]
    if isinstance(outcome, NoChange):
        return [f"- '{name}' up to date at version {outcome.current_version}"]
    if isinstance(outcome, Ignored):
        return [
            f"- warning: ignored '{name}' - left at version {outcome.at_version}",
            f"  (dependency {name} present but has no lock file entry)",
        ]
    assert_never(outcome)


def new_lock_version(outcome: AcquireOutcome) -> str | None:
    """只有首次拉取和升级会产生新的锁定版本"""
    if isinstance(outcome, Acquired):
        return outcome.at_version
    if isinstance(outcome, UpgradedTo):
        return outcome.to_version
    if isinstance(outcome, (Restored, NoChange, Ignored)):
        return None
    assert_never(outcome)


class AcquireService:
    """按清单批量获取依赖并维护锁文件"""

    def __init__(
        self,
        project_path: Path,
        registry: VcsRegistry | None = None,
        executor: CommandExecutor | None = None,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        cfg = get_config()
        self.project_path = project_path
        self.manifest_path = project_path / cfg.config_file
        self.lock_path = project_path / cfg.lock_file
        self.registry = registry or VcsRegistry()
        self.executor = executor
        self.echo = echo or logger.info

    def acquire_all(self) -> AcquireReport:
        """获取清单中全部依赖：有锁定版本的锁定，否则首次拉取"""
        config = load_config(self.manifest_path)
        lock = load_lock(self.lock_path)

        def mode_for(dep: Dependency) -> AcquireMode:
            locked = lock.dependencies.get(dep.name)
            if locked is not None:
                return LockTo(version=locked.version)
            return Acquire()

        return self._run(config.dependencies.values(), mode_for, lock)

    def upgrade(self, names: Iterable[str] = (), *, upgrade_all: bool = False) -> AcquireReport:
        """升级指定依赖（或全部依赖）到最新版本，忽略锁文件中的版本"""
        names = list(names)
        if upgrade_all and names:
            raise ValidationError("--all 与依赖名不能同时指定")
        if not upgrade_all and not names:
            raise ValidationError("请指定 --all 或要升级的依赖名")

        config = load_config(self.manifest_path)
        lock = load_lock(self.lock_path)

        if upgrade_all:
            selected = list(config.dependencies.values())
        else:
            for name in names:
                if name not in config.dependencies:
                    logger.warning("依赖 '%s' 不在清单中，跳过", name)
            selected = [dep for name, dep in config.dependencies.items() if name in names]

        return self._run(selected, lambda _dep: Upgrade(), lock)

    def _run(
        self,
        dependencies: Iterable[Dependency],
        mode_for: Callable[[Dependency], AcquireMode],
        lock: DerpyFile,
    ) -> AcquireReport:
        report = AcquireReport()
        for dep in dependencies:
            outcome = acquire(
                self._localize(dep), mode_for(dep),
                registry=self.registry, executor=self.executor,
            )
            report.outcomes.append((dep.name, outcome))
            for line in describe_outcome(dep.name, outcome):
                self.echo(line)

            version = new_lock_version(outcome)
            if version is not None:
                lock.dependencies[dep.name] = replace(dep, version=version)
                report.lock_updated = True

        if report.lock_updated:
            save_config(lock, self.lock_path)
            self.echo("lock file updated")
        return report

    def _localize(self, dep: Dependency) -> Dependency:
        """相对 target 基于项目目录展开（记录中保留相对形式）"""
        target = Path(dep.target)
        if target.is_absolute():
            return dep
        return replace(dep, target=str(self.project_path / target))
