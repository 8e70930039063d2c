"""
ModExtract 打包层

包含 zip 生成器与工作目录清理。
"""

from modextract.packager.zip import WORKSPACE_LEFTOVERS, ZipBuilder, cleanup_workspace

__all__ = [
    "WORKSPACE_LEFTOVERS",
    "ZipBuilder",
    "cleanup_workspace",
]
