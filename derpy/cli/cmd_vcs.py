"""CLI — VCS 后端查看命令"""

from __future__ import annotations

import click

from derpy.core.exceptions import DerpyError
from derpy.core.vcs import VcsBackend, VcsRegistry


def register(group: click.Group) -> None:
    group.add_command(list_vcs)


@click.command(name="vcs")
def list_vcs() -> None:
    """列出已安装的 VCS 描述及探测到的工具版本"""
    registry = VcsRegistry()
    names = registry.list_available()
    if not names:
        click.echo(f"没有已安装的 VCS 描述: {registry.vcs_dir}")
        return
    for name in names:
        backend = VcsBackend(registry.get(name))
        try:
            tool_version = backend.get_version()
        except DerpyError:
            tool_version = "未安装"
        click.echo(f"  {name:6s} default={backend.default_version:10s} {tool_version}")
