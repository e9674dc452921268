"""derpy 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from derpy import __version__
from derpy.core.config import init_config
from derpy.core.exceptions import DerpyError
from derpy.utils.logger import setup_logging
from derpy.utils.path_utils import determine_cwd


@dataclass
class CommandContext:
    """命令执行上下文"""

    path: Path
    verbosity: int = 0


def _ctx() -> CommandContext:
    """获取当前命令上下文的快捷方式"""
    return click.get_current_context().find_root().obj


class DerpyGroup(click.Group):
    """统一把 DerpyError 转成 "error: ..." 输出和非零退出码"""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except DerpyError as e:
            click.echo(f"error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=DerpyGroup)
@click.version_option(version=__version__)
@click.option("--path", "-p", default=None, help="视为当前工作目录的路径")
@click.option("--verbose", "-v", "verbosity", count=True, help="提高输出详细程度（可重复）")
@click.option("--config", "config_file", default=None, help="derpy 配置文件路径")
@click.pass_context
def main(ctx: click.Context, path: str | None, verbosity: int, config_file: str | None) -> None:
    """derpy - 简单的语言与 VCS 无关的依赖管理工具"""
    setup_logging(
        verbosity=verbosity,
        json_output=os.getenv("DERPY_LOG_JSON", "") == "1",
    )
    if config_file:
        init_config(config_file)
    ctx.obj = CommandContext(path=determine_cwd(path), verbosity=verbosity)


# 注册各领域子命令
from derpy.cli.cmd_manifest import register as _reg_manifest  # noqa: E402
from derpy.cli.cmd_acquire import register as _reg_acquire  # noqa: E402
from derpy.cli.cmd_vcs import register as _reg_vcs  # noqa: E402

_reg_manifest(main)
_reg_acquire(main)
_reg_vcs(main)
