"""
配置模块

定义 ExtractorConfig 并支持从 toml/json/yaml 文件加载。
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import toml
import yaml

from modextract.exceptions import ConfigError, ConfigParseError

CURSEFORGE_DOWNLOAD_URL = (
    "https://www.curseforge.com/api/v1/mods/{project_id}/files/{file_id}/download"
)
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Ubuntu Chromium/53.0.2785.143 Chrome/53.0.2785.143 Safari/537.36"
)


@dataclass
class ExtractorConfig:
    """提取器配置"""

    download_url: str = CURSEFORGE_DOWNLOAD_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 3.0
    max_concurrent: int = 1
    forbidden_is_missing: bool = True
    output_dir: Optional[str] = None
    archive_suffix: str = "MultiMC"
    cleanup: bool = True
    open_output: bool = False

    def __post_init__(self):
        self._validate()

    def _validate(self):
        if not isinstance(self.max_concurrent, int) or self.max_concurrent <= 0:
            raise ConfigError(
                "max_concurrent 必须为正整数",
                context={"max_concurrent": self.max_concurrent},
            )
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigError("timeout 必须为数字", context={"timeout": self.timeout})
        if self.timeout <= 0:
            raise ConfigError("timeout 必须大于 0", context={"timeout": self.timeout})
        if "{project_id}" not in self.download_url or "{file_id}" not in self.download_url:
            raise ConfigError(
                "download_url 必须包含 {project_id} 和 {file_id}",
                context={"download_url": self.download_url},
            )

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ExtractorConfig":
        """从字典创建配置，忽略未知键"""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("配置内容必须为键值表")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(config_path: str) -> dict:
    """加载配置文件"""
    path = Path(config_path)

    if not path.exists():
        raise ConfigParseError(
            f"配置文件不存在: {config_path}", context={"path": config_path}
        )

    suffix = path.suffix.lower()

    try:
        if suffix == ".toml":
            return toml.load(config_path)
        elif suffix == ".json":
            return json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (toml.TomlDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigParseError(
            f"配置文件解析失败: {e}", context={"path": config_path}
        ) from e

    raise ConfigParseError(
        f"不支持的配置文件格式: {suffix}", context={"path": config_path}
    )
