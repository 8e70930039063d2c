"""
ModExtract 下载层

包含模组下载器与下载结果模型。
"""

from modextract.download.manager import (
    FetchOutcome,
    FetchResponse,
    ModDownloader,
    RetrievalResult,
    resolve_filename,
    status_severity,
)

__all__ = [
    "FetchOutcome",
    "FetchResponse",
    "ModDownloader",
    "RetrievalResult",
    "resolve_filename",
    "status_severity",
]
