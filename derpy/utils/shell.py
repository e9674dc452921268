"""Shell 命令执行工具 — 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，方便测试替换。
VCS 命令统一走 run_vcs_cmd / run_cmd_sequence：工作目录显式传入，
从不修改进程级当前目录。
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from derpy.core.exceptions import SubprocessError, VcsCommandFailedError

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        # 负数返回码表示被信号终止，同样视为失败
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议 — 抽象子进程调用

    实现此协议即可替换底层执行方式。
    测试时可注入 mock 实现，无需 patch subprocess。
    进程无法启动时应抛出 OSError。
    """

    def execute(self, cmd: Sequence[str], *, cwd: str | None = None) -> CommandResult:
        """执行命令并返回结果"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地命令执行器（默认实现，不经过 shell）"""

    def execute(self, cmd: Sequence[str], *, cwd: str | None = None) -> CommandResult:
        r = subprocess.run(
            list(cmd), capture_output=True, text=True,
            cwd=cwd, check=False,
        )
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )


# =========================================================================
# 全局默认执行器（可替换）
# =========================================================================

_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor


# =========================================================================
# VCS 命令执行
# =========================================================================

def run_vcs_cmd(
    cmd: Sequence[str], *,
    cwd: str | None = None,
    executor: CommandExecutor | None = None,
) -> tuple[str, str]:
    """执行单条已展开的 VCS 命令，返回 (去除首尾空白的 stdout, 原始 stderr)

    Args:
        cmd: 命令 token 列表
        cwd: 工作目录（None 表示调用方当前目录）
        executor: 命令执行器（不传则使用全局默认）

    Raises:
        SubprocessError: 进程无法启动（工具未安装、无权限等）
        VcsCommandFailedError: 进程以非零状态退出
    """
    executor = executor or get_executor()
    logger.info("running command: %s", list(cmd))
    if cwd is not None:
        logger.debug("  cwd=%s", cwd)
    try:
        r = executor.execute(cmd, cwd=cwd)
    except OSError as e:
        raise SubprocessError(cmd, e) from e
    if not r.success:
        raise VcsCommandFailedError(cmd, r.returncode, r.stdout, r.stderr)
    return r.stdout.strip(), r.stderr


def run_cmd_sequence(
    sequence: Sequence[Sequence[str]], *,
    cwd: str | None = None,
    executor: CommandExecutor | None = None,
) -> None:
    """顺序执行命令列表，首个失败的命令终止后续命令（已执行的不回滚）"""
    for cmd in sequence:
        run_vcs_cmd(cmd, cwd=cwd, executor=executor)
