"""统一异常体系

所有业务异常继承 DerpyError，每类异常带一个稳定的 code。
核心层只负责抛出，CLI 层统一捕获并输出友好提示。
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


class DerpyError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


# =========================================================================
# 获取流程核心异常
# =========================================================================


class UnknownVcsError(DerpyError):
    """找不到对应名称的 VCS 描述文件"""

    code = "UNKNOWN_VCS"

    def __init__(self, name: str) -> None:
        super().__init__(f"未知的版本控制系统: '{name}'")
        self.name = name


class FailedToCreateDirectoryError(DerpyError):
    """创建目标目录失败"""

    code = "FAILED_TO_CREATE_DIRECTORY"

    def __init__(self, path: str, error: OSError) -> None:
        super().__init__(f"创建目录失败 '{path}': {error}")
        self.path = path
        self.error = error


class UnableToChangeDirError(DerpyError):
    """命令的工作目录不存在或不可用"""

    code = "UNABLE_TO_CHANGE_DIR"

    def __init__(self, path: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"无法切换到目录 '{path}'{detail}")
        self.path = path


class UnableToDetermineCurrentDirError(DerpyError):
    """无法获取进程当前目录（目录可能已被删除）"""

    code = "UNABLE_TO_DETERMINE_CURRENT_DIR"

    def __init__(self, error: OSError) -> None:
        super().__init__(f"无法获取当前目录: {error}")
        self.error = error


class MacroExpansionError(DerpyError):
    """命令模板中的占位符无法展开"""

    code = "MACRO_EXPANSION_FAILURE"

    def __init__(self, source_text: str, macros: Mapping[str, str], reason: str) -> None:
        super().__init__(
            f"宏展开失败: {reason} "
            f"(原文: {source_text}, 宏: {dict(macros)})"
        )
        self.source_text = source_text
        self.macros = dict(macros)


class SubprocessError(DerpyError):
    """子进程无法启动或通信失败（工具未安装、无权限等）"""

    code = "SUBPROCESS_ERROR"

    def __init__(self, cmd: Sequence[str], error: OSError) -> None:
        super().__init__(f"子进程调用失败: {error} (命令: {list(cmd)})")
        self.cmd = list(cmd)
        self.error = error


class VcsCommandFailedError(DerpyError):
    """VCS 命令以非零状态退出"""

    code = "VCS_COMMAND_FAILED"

    def __init__(
        self, cmd: Sequence[str], returncode: int, stdout: str, stderr: str,
    ) -> None:
        super().__init__(
            f"VCS 命令 {list(cmd)} 返回 {returncode}, "
            f"stdout='{stdout}', stderr='{stderr}'"
        )
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class NonsenseAcquireModeError(DerpyError):
    """对不存在的工作副本请求锁定或升级"""

    code = "NONSENSE_ACQUIRE_MODE"

    def __init__(self, dependency: str, mode: Any) -> None:
        super().__init__(
            f"依赖 '{dependency}' 的获取模式为 {mode}，但未找到仓库"
        )
        self.dependency = dependency
        self.mode = mode


# =========================================================================
# 清单 / 描述文件 / 参数异常
# =========================================================================


class ConfigError(DerpyError):
    """清单或锁文件无法读取、解析或写入"""

    code = "CONFIG_ERROR"


class ConfigNotFoundError(ConfigError):
    """清单文件不存在（未执行 init）"""

    code = "CONFIG_NOT_FOUND"


class VcsInfoError(DerpyError):
    """VCS 描述文件存在但内容无效"""

    code = "VCS_INFO_ERROR"


class AlreadyInitialisedError(DerpyError):
    """当前目录已初始化"""

    code = "ALREADY_INITIALISED"

    def __init__(self) -> None:
        super().__init__("当前目录已初始化")


class DependencyAlreadyExistsError(DerpyError):
    """清单中已存在同名依赖"""

    code = "DEPENDENCY_ALREADY_EXISTS"

    def __init__(self, name: str) -> None:
        super().__init__(f"依赖 '{name}' 已存在")
        self.name = name


class ValidationError(DerpyError):
    """输入参数校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []
