"""清单服务 — init / add / 列出依赖"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from derpy.core.config import get_config
from derpy.core.derpyfile import load_config, save_config
from derpy.core.exceptions import (
    AlreadyInitialisedError,
    DependencyAlreadyExistsError,
    DerpyError,
    ValidationError,
)
from derpy.core.models import DerpyFile, Dependency
from derpy.core.vcs import VcsBackend, VcsRegistry
from derpy.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


def parse_option_key_value(text: str) -> tuple[str, str]:
    """解析 KEY:VALUE 形式的选项，只在第一个 ':' 处切分"""
    key, sep, value = text.partition(":")
    if not sep:
        raise ValidationError(
            f"选项 '{text}' 无效: 键值对必须是用 ':' 分隔的两个字符串"
        )
    return key, value


class ManifestService:
    """项目清单管理"""

    def __init__(
        self,
        project_path: Path,
        registry: VcsRegistry | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        cfg = get_config()
        self.project_path = project_path
        self.manifest_path = project_path / cfg.config_file
        self.default_target = cfg.dependency_dir
        self.registry = registry or VcsRegistry()
        self.executor = executor

    def init(self) -> Path:
        """在项目目录创建空清单"""
        if self.manifest_path.is_file():
            raise AlreadyInitialisedError()
        save_config(DerpyFile(), self.manifest_path)
        logger.info("已初始化: %s", self.manifest_path)
        return self.manifest_path

    def add(
        self,
        vcs: str,
        name: str,
        url: str,
        *,
        version: str | None = None,
        target: str | None = None,
        options: Iterable[str] = (),
    ) -> Dependency:
        """向清单添加依赖，未指定版本时使用后端的默认版本"""
        backend = VcsBackend(self.registry.get(vcs), executor=self.executor)
        self._probe_tool(backend)

        parsed = dict(parse_option_key_value(o) for o in options)
        dependency = Dependency(
            name=name,
            vcs=vcs,
            url=url,
            version=version or backend.default_version,
            target=target or self.default_target,
            options=dict(sorted(parsed.items())),
        )

        config = load_config(self.manifest_path)
        if name in config.dependencies:
            raise DependencyAlreadyExistsError(name)
        config.dependencies[name] = dependency
        save_config(config, self.manifest_path)
        logger.info("已添加依赖 '%s' (%s %s@%s)", name, vcs, url, dependency.version)
        return dependency

    def list_dependencies(self) -> list[Dependency]:
        return list(load_config(self.manifest_path).dependencies.values())

    @staticmethod
    def _probe_tool(backend: VcsBackend) -> str | None:
        """探测 VCS 工具版本，失败只告警"""
        try:
            version = backend.get_version()
        except DerpyError as e:
            logger.warning(
                "unable to determine version of %s, is it installed? (%s)",
                backend.name, e,
            )
            return None
        logger.debug("detected %s at version '%s'", backend.name, version)
        return version
