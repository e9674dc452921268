"""VCS 描述文件注册表

职责:
- 按名称从描述目录加载 <name>.yml（或 <name>.json）
- 列出已安装的描述文件
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from derpy.core.exceptions import UnknownVcsError, VcsInfoError
from derpy.core.vcs.models import VcsInfo
from derpy.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

_SUFFIXES = (".yml", ".yaml", ".json")


class VcsRegistry:
    """VCS 描述注册表 — 按需加载，不做缓存"""

    def __init__(self, vcs_dir: str | Path | None = None) -> None:
        if vcs_dir is None:
            from derpy.core.config import get_config
            vcs_dir = get_config().resolve_vcs_info_dir()
        self.vcs_dir = Path(vcs_dir)

    def _find(self, name: str) -> Path | None:
        # 名称中带路径分隔符的一律视为未知
        if not name or "/" in name or "\\" in name or name.startswith("."):
            return None
        for suffix in _SUFFIXES:
            path = self.vcs_dir / f"{name}{suffix}"
            if path.is_file():
                return path
        return None

    def load(self, name: str) -> VcsInfo | None:
        """加载指定名称的描述，不存在时返回 None"""
        path = self._find(name)
        if path is None:
            return None
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, OSError, ValueError) as e:
            raise VcsInfoError(f"无法读取 VCS 描述文件 {path}: {e}") from e
        info = VcsInfo.from_dict(data)
        if info.name != name:
            raise VcsInfoError(f"VCS 描述文件 {path} 声明的名称 '{info.name}' 与文件名不一致")
        logger.debug("已加载 VCS 描述: %s -> %s", name, path)
        return info

    def get(self, name: str) -> VcsInfo:
        """加载指定名称的描述，不存在时抛出 UnknownVcsError"""
        info = self.load(name)
        if info is None:
            raise UnknownVcsError(name)
        return info

    def list_available(self) -> list[str]:
        if not self.vcs_dir.is_dir():
            return []
        return sorted({
            p.stem for p in self.vcs_dir.iterdir()
            if p.is_file() and p.suffix in _SUFFIXES and not p.name.startswith(".")
        })
