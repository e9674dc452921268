"""命令模板宏展开

占位符语法沿用 str.format 的花括号: {DEP_URL}，{{ 和 }} 表示字面花括号。
花括号内的整段文本按字面作为宏名查表（不解析 . 和 [] 访问），
不支持 !r 转换和 :spec 格式说明。
引用宏表中不存在的名字属于硬错误，不做静默透传。
"""

from __future__ import annotations

import string
from collections.abc import Mapping, Sequence

from derpy.core.exceptions import MacroExpansionError
from derpy.core.vcs.models import VcsCommand, VcsCommandList

_formatter = string.Formatter()


def expand_token(token: str, macros: Mapping[str, str]) -> str:
    try:
        parts = list(_formatter.parse(token))
    except ValueError as e:
        raise MacroExpansionError(token, macros, str(e)) from e

    out: list[str] = []
    for literal, field_name, format_spec, conversion in parts:
        out.append(literal)
        if field_name is None:
            continue
        if conversion is not None or format_spec:
            raise MacroExpansionError(token, macros, f"宏 '{field_name}' 不支持转换或格式说明")
        if field_name not in macros:
            raise MacroExpansionError(token, macros, f"未定义的宏 '{field_name}'")
        out.append(macros[field_name])
    return "".join(out)


def expand_command(cmd: Sequence[str], macros: Mapping[str, str]) -> VcsCommand:
    """逐个展开命令中的 token，保持顺序"""
    return tuple(expand_token(token, macros) for token in cmd)


def expand_command_list(
    commands: Sequence[Sequence[str]], macros: Mapping[str, str],
) -> VcsCommandList:
    return tuple(expand_command(cmd, macros) for cmd in commands)
