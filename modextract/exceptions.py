"""
ModExtract 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息和 JSON 序列化。
"""

from typing import Any, Dict, Optional


class ModExtractError(Exception):
    """ModExtract 基础异常类"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ArchiveError(ModExtractError):
    """整合包压缩文件错误"""

    def _get_default_code(self) -> str:
        return "E100"


class ManifestError(ModExtractError):
    """manifest 相关错误"""

    def _get_default_code(self) -> str:
        return "E200"


class ManifestNotFoundError(ManifestError):
    """manifest.json 不存在"""

    def _get_default_code(self) -> str:
        return "E201"


class ManifestMalformedError(ManifestError):
    """manifest.json 无法解析"""

    def _get_default_code(self) -> str:
        return "E202"


class ManifestValidationError(ManifestError):
    """manifest 缺少可用的模组加载器版本"""

    def _get_default_code(self) -> str:
        return "E203"


class DownloadError(ModExtractError):
    """下载相关错误"""

    def _get_default_code(self) -> str:
        return "E300"


class MissingFileListError(DownloadError):
    """manifest 中没有 files 列表"""

    def _get_default_code(self) -> str:
        return "E301"


class DownloadNetworkError(DownloadError):
    """下载网络错误"""

    def _get_default_code(self) -> str:
        return "E302"


class InstanceWriteError(ModExtractError):
    """instance.cfg 写入错误"""

    def _get_default_code(self) -> str:
        return "E400"


class PackagerError(ModExtractError):
    """打包相关错误"""

    def _get_default_code(self) -> str:
        return "E500"


class ZipError(PackagerError):
    """ZIP 生成错误"""

    def _get_default_code(self) -> str:
        return "E501"


class ConfigError(ModExtractError):
    """配置相关错误"""

    def _get_default_code(self) -> str:
        return "E600"


class ConfigParseError(ConfigError):
    """配置解析错误"""

    def _get_default_code(self) -> str:
        return "E601"


__all__ = [
    # 基础异常
    "ModExtractError",
    # 整合包异常
    "ArchiveError",
    # manifest 异常
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestMalformedError",
    "ManifestValidationError",
    # 下载异常
    "DownloadError",
    "MissingFileListError",
    "DownloadNetworkError",
    # 实例异常
    "InstanceWriteError",
    # 打包异常
    "PackagerError",
    "ZipError",
    # 配置异常
    "ConfigError",
    "ConfigParseError",
]
