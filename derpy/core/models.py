"""核心数据模型

- Dependency: 单个依赖的身份与获取意图
- DerpyFile: 清单 / 锁文件的内容（依赖名 → Dependency）
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from derpy.core.exceptions import ConfigError

_REQUIRED_FIELDS = ("name", "vcs", "url", "version", "target")


@dataclass
class Dependency:
    """单个依赖

    version 在清单中表示请求的版本（分支、提交、修订号等），
    在锁文件中表示上一次实际获取到的版本。
    """

    name: str
    vcs: str
    url: str
    version: str
    target: str
    options: dict[str, str] = field(default_factory=dict)

    @property
    def full_path(self) -> Path:
        """工作副本路径，恒为 target/name"""
        return Path(self.target) / self.name

    def build_macro_map(self) -> dict[str, str]:
        """构建命令模板的宏表"""
        macros = {
            "DEP_NAME": self.name,
            "DEP_URL": self.url,
            "DEP_VERSION": self.version,
        }
        for key, value in self.options.items():
            macros[f"DEP_OPT_{key}"] = value
        return macros

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "vcs": self.vcs,
            "url": self.url,
            "version": self.version,
            "target": self.target,
            "options": dict(sorted(self.options.items())),
        }

    @classmethod
    def from_dict(cls, data: Any) -> Dependency:
        if not isinstance(data, dict):
            raise ConfigError(f"依赖条目必须是映射: {data!r}")
        missing = [k for k in _REQUIRED_FIELDS if k not in data]
        if missing:
            raise ConfigError(f"依赖条目缺少字段 {missing}: {data!r}")
        options = data.get("options") or {}
        if not isinstance(options, dict):
            raise ConfigError(f"依赖 '{data['name']}' 的 options 必须是映射")
        return cls(
            name=str(data["name"]),
            vcs=str(data["vcs"]),
            url=str(data["url"]),
            version=str(data["version"]),
            target=str(data["target"]),
            options={str(k): str(v) for k, v in sorted(options.items())},
        )


@dataclass
class DerpyFile:
    """清单 / 锁文件内容"""

    dependencies: dict[str, Dependency] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dependencies": {
                name: dep.to_dict()
                for name, dep in sorted(self.dependencies.items())
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DerpyFile:
        raw = data.get("dependencies") or {}
        if not isinstance(raw, dict):
            raise ConfigError("dependencies 段必须是映射")
        deps = {str(name): Dependency.from_dict(info) for name, info in raw.items()}
        return cls(dependencies=dict(sorted(deps.items())))
