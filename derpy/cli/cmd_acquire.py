"""CLI — 依赖获取命令"""

from __future__ import annotations

import click

from derpy.cli import _ctx
from derpy.services.acquire_service import AcquireService


def register(group: click.Group) -> None:
    group.add_command(acquire)
    group.add_command(upgrade)


@click.command()
def acquire() -> None:
    """确保所有依赖都已获取并处于锁定版本"""
    AcquireService(_ctx().path, echo=click.echo).acquire_all()


@click.command()
@click.option("--all", "upgrade_all", is_flag=True, help="升级全部依赖")
@click.argument("dependencies", nargs=-1)
def upgrade(upgrade_all: bool, dependencies: tuple[str, ...]) -> None:
    """与 acquire 类似，但忽略锁文件，允许依赖更新到最新版本"""
    AcquireService(_ctx().path, echo=click.echo).upgrade(
        dependencies, upgrade_all=upgrade_all,
    )
