"""derpy - 语言与 VCS 无关的依赖获取工具"""

__version__ = "0.1.0"
