"""测试共享 fixture — 可编排的假命令执行器 + 全局状态隔离

FakeExecutor 实现 CommandExecutor 协议:
  - 记录每次调用的 (命令, 工作目录)
  - 按命令前缀匹配规则返回预设结果，后注册的规则优先
  - stdout 可以是字符串、按次消费的列表（最后一个重复）或 callable(cmd, cwd)
  - action 用于模拟命令副作用（例如 clone 创建目录、抛出 OSError）
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from derpy.core.config import install_dir, reset_config
from derpy.core.models import Dependency
from derpy.core.vcs import VcsRegistry
from derpy.utils.logger import reset_logging
from derpy.utils.shell import CommandResult, LocalExecutor, set_executor


class _Rule:
    def __init__(self, prefix: tuple[str, ...], stdout: Any, stderr: str,
                 returncode: int, action: Callable[[tuple[str, ...], str | None], None] | None) -> None:
        self.prefix = prefix
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.action = action
        self.hits = 0

    def render_stdout(self, cmd: tuple[str, ...], cwd: str | None) -> str:
        if callable(self.stdout):
            return self.stdout(cmd, cwd)
        if isinstance(self.stdout, list):
            return self.stdout[min(self.hits, len(self.stdout) - 1)]
        return self.stdout


class FakeExecutor:
    """可编排的假命令执行器"""

    def __init__(self) -> None:
        self.calls: list[tuple[tuple[str, ...], str | None]] = []
        self._rules: list[_Rule] = []

    def on(
        self, *prefix: str,
        stdout: Any = "",
        stderr: str = "",
        returncode: int = 0,
        action: Callable[[tuple[str, ...], str | None], None] | None = None,
    ) -> FakeExecutor:
        self._rules.append(_Rule(prefix, stdout, stderr, returncode, action))
        return self

    def execute(self, cmd: Sequence[str], *, cwd: str | None = None) -> CommandResult:
        cmd = tuple(cmd)
        self.calls.append((cmd, cwd))
        for rule in reversed(self._rules):
            if cmd[:len(rule.prefix)] == rule.prefix:
                if rule.action is not None:
                    rule.action(cmd, cwd)
                stdout = rule.render_stdout(cmd, cwd)
                rule.hits += 1
                return CommandResult(rule.returncode, stdout, rule.stderr)
        return CommandResult(0, "", "")

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [cmd for cmd, _ in self.calls]


def make_clone_dir(cmd: tuple[str, ...], cwd: str | None) -> None:
    """模拟 git clone <url> <name>：在 cwd 下创建 name 目录"""
    assert cwd is not None
    (Path(cwd) / cmd[-1]).mkdir()


@pytest.fixture()
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture()
def git_executor(fake_executor: FakeExecutor) -> FakeExecutor:
    """按包内 git.yml 的命令形态预置规则: clone 创建目录，rev-parse 返回 abc123"""
    fake_executor.on("git", "clone", action=make_clone_dir)
    fake_executor.on("git", "rev-parse", "HEAD", stdout="abc123\n")
    return fake_executor


@pytest.fixture()
def registry() -> VcsRegistry:
    """包内自带的 VCS 描述目录"""
    return VcsRegistry(install_dir() / "vcs_info")


@pytest.fixture()
def dep(tmp_path: Path) -> Dependency:
    return Dependency(
        name="foo",
        vcs="git",
        url="https://example.com/foo.git",
        version="main",
        target=str(tmp_path / "deps"),
    )


@pytest.fixture(autouse=True)
def _isolate_globals(monkeypatch: pytest.MonkeyPatch):
    """每个用例使用默认配置和真实执行器，避免相互污染"""
    monkeypatch.delenv("DERPY_VCS_INFO_DIR", raising=False)
    reset_config()
    yield
    reset_config()
    reset_logging()
    set_executor(LocalExecutor())
