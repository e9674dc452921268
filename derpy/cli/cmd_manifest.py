"""CLI — 清单管理命令"""

from __future__ import annotations

import click

from derpy.cli import _ctx
from derpy.core.exceptions import ValidationError
from derpy.services.manifest_service import ManifestService, parse_option_key_value


def register(group: click.Group) -> None:
    group.add_command(init)
    group.add_command(add)
    group.add_command(list_deps)


def _validate_options(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...],
) -> tuple[str, ...]:
    for option in value:
        try:
            parse_option_key_value(option)
        except ValidationError as e:
            raise click.BadParameter(str(e)) from e
    return value


@click.command()
def init() -> None:
    """在当前目录初始化 derpy"""
    path = ManifestService(_ctx().path).init()
    click.echo(f"已创建: {path}")


@click.command()
@click.argument("vcs")
@click.argument("name")
@click.argument("url")
@click.option("--version", default=None, help="要获取的版本（分支、提交、修订号等）")
@click.option("--target", default=None, help="依赖存放目录（默认 deps/）")
@click.option(
    "--option", "options", multiple=True, callback=_validate_options,
    help="KEY:VALUE 形式的后端选项（可多次指定）",
)
def add(
    vcs: str, name: str, url: str,
    version: str | None, target: str | None, options: tuple[str, ...],
) -> None:
    """向当前项目添加依赖"""
    dep = ManifestService(_ctx().path).add(
        vcs, name, url, version=version, target=target, options=options,
    )
    click.echo(f"已添加: {dep.name} ({dep.vcs} {dep.url}@{dep.version})")


@click.command(name="deps")
def list_deps() -> None:
    """列出清单中的依赖"""
    deps = ManifestService(_ctx().path).list_dependencies()
    if not deps:
        click.echo("没有已声明的依赖。")
        return
    for d in deps:
        click.echo(f"  {d.name:20s} {d.version:12s} [{d.vcs:4s}] {d.url} -> {d.full_path}")
