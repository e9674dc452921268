"""VCS 描述文件数据模型

一个 VcsInfo 描述如何用某个版本控制工具完成各项操作。
命令为 token 元组，每个 token 可包含 {DEP_NAME} 形式的占位符。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from derpy.core.exceptions import VcsInfoError

VcsCommand = tuple[str, ...]
VcsCommandList = tuple[VcsCommand, ...]


def _as_command(name: str, field_name: str, value: Any) -> VcsCommand:
    if not isinstance(value, list) or not value or not all(isinstance(t, str) for t in value):
        raise VcsInfoError(f"VCS '{name}' 的 {field_name} 必须是非空字符串列表")
    return tuple(value)


def _as_command_list(name: str, field_name: str, value: Any) -> VcsCommandList:
    if not isinstance(value, list):
        raise VcsInfoError(f"VCS '{name}' 的 {field_name} 必须是命令列表")
    return tuple(_as_command(name, field_name, cmd) for cmd in value)


@dataclass(frozen=True)
class VcsInfo:
    """单个 VCS 后端的命令模板（加载后不可变）"""

    name: str
    get_version: VcsCommand
    default_version: str
    acquire: VcsCommandList
    checkout: VcsCommandList
    upgrade: VcsCommandList
    get_version_of: VcsCommand

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VcsInfo:
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise VcsInfoError(f"VCS 描述缺少 name: {data!r}")
        default_version = data.get("default_version")
        if not isinstance(default_version, str):
            raise VcsInfoError(f"VCS '{name}' 的 default_version 必须是字符串")
        return cls(
            name=name,
            get_version=_as_command(name, "get_version", data.get("get_version")),
            default_version=default_version,
            acquire=_as_command_list(name, "acquire", data.get("acquire")),
            checkout=_as_command_list(name, "checkout", data.get("checkout")),
            upgrade=_as_command_list(name, "upgrade", data.get("upgrade")),
            get_version_of=_as_command(name, "get_version_of", data.get("get_version_of")),
        )
