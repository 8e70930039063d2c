"""
ModExtract - 将 CurseForge 整合包转换为 MultiMC 实例
"""

__version__ = "0.1.0"

from modextract.config import ExtractorConfig
from modextract.orchestrator import ExtractOrchestrator, PipelineResult

__all__ = [
    "__version__",
    "ExtractorConfig",
    "ExtractOrchestrator",
    "PipelineResult",
]
