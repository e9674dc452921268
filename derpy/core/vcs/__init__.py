"""VCS 后端模块

- models.py: 描述文件数据模型
- macros.py: 命令模板宏展开
- registry.py: 描述文件加载
- backend.py: 通用后端操作
"""

from derpy.core.vcs.backend import VcsBackend
from derpy.core.vcs.macros import expand_command, expand_command_list
from derpy.core.vcs.models import VcsCommand, VcsCommandList, VcsInfo
from derpy.core.vcs.registry import VcsRegistry

__all__ = [
    "VcsInfo",
    "VcsCommand",
    "VcsCommandList",
    "VcsRegistry",
    "VcsBackend",
    "expand_command",
    "expand_command_list",
]
