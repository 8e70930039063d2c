"""
ModExtract 数据模型包

包含 manifest 模型定义。
"""

from modextract.models.manifest import (
    NO_LOADER,
    ModLoaderEntry,
    FileReference,
    MinecraftData,
    Manifest,
)

__all__ = [
    "NO_LOADER",
    "ModLoaderEntry",
    "FileReference",
    "MinecraftData",
    "Manifest",
]
