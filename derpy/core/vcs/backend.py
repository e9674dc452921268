"""VCS 后端操作

五个操作对任意 VcsInfo 通用实现，不按后端派生子类:
宏展开 → 校验工作目录 → 通过命令执行器运行。
"""

from __future__ import annotations

import logging

from derpy.core.models import Dependency
from derpy.core.vcs.macros import expand_command, expand_command_list
from derpy.core.vcs.models import VcsInfo
from derpy.utils.path_utils import resolve_work_dir
from derpy.utils.shell import CommandExecutor, run_cmd_sequence, run_vcs_cmd

logger = logging.getLogger(__name__)


class VcsBackend:
    """基于描述文件驱动外部 VCS 工具"""

    def __init__(self, info: VcsInfo, executor: CommandExecutor | None = None) -> None:
        self.info = info
        self.executor = executor

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def default_version(self) -> str:
        return self.info.default_version

    def get_version(self) -> str:
        """获取 VCS 工具自身版本，在调用方当前目录执行（仅用于诊断）"""
        stdout, _ = run_vcs_cmd(self.info.get_version, executor=self.executor)
        return stdout

    def acquire(self, dep: Dependency) -> None:
        """首次拉取：在 target 目录中执行，由后端负责创建 target/name"""
        cmds = expand_command_list(self.info.acquire, dep.build_macro_map())
        cwd = resolve_work_dir(dep.target)
        run_cmd_sequence(cmds, cwd=cwd, executor=self.executor)

    def checkout(self, dep: Dependency, version: str) -> None:
        """切换到指定版本（DEP_VERSION 取目标版本而非依赖记录的版本）"""
        macros = dep.build_macro_map()
        macros["DEP_VERSION"] = version
        cmds = expand_command_list(self.info.checkout, macros)
        cwd = resolve_work_dir(dep.full_path)
        run_cmd_sequence(cmds, cwd=cwd, executor=self.executor)

    def upgrade(self, dep: Dependency) -> None:
        cmds = expand_command_list(self.info.upgrade, dep.build_macro_map())
        cwd = resolve_work_dir(dep.full_path)
        run_cmd_sequence(cmds, cwd=cwd, executor=self.executor)

    def get_version_of(self, dep: Dependency) -> str:
        """获取工作副本当前检出的版本"""
        cmd = expand_command(self.info.get_version_of, dep.build_macro_map())
        cwd = resolve_work_dir(dep.full_path)
        stdout, _ = run_vcs_cmd(cmd, cwd=cwd, executor=self.executor)
        return stdout
