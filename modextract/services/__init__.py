"""
ModExtract 服务层

包含 manifest 加载服务。
"""

from modextract.services.manifest_loader import MANIFEST_FILENAME, ManifestLoader

__all__ = [
    "MANIFEST_FILENAME",
    "ManifestLoader",
]
