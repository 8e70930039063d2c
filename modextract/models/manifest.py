"""
manifest 数据模型

定义整合包 manifest.json 的数据类，包括加载器、文件引用等。
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from modextract.exceptions import ManifestMalformedError

NO_LOADER = "N/A"


def _expect_dict(data: Any, where: str) -> dict:
    if not isinstance(data, dict):
        raise ManifestMalformedError(
            f"{where} 应为对象，实际为 {type(data).__name__}",
            context={"field": where},
        )
    return data


def _expect_int(data: dict, key: str, where: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ManifestMalformedError(
            f"{where}.{key} 应为整数，实际为 {value!r}",
            context={"field": f"{where}.{key}"},
        )
    return value


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else str(value)


@dataclass
class ModLoaderEntry:
    """模组加载器条目，例如 forge-14.23.5.2847"""

    id: str
    primary: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "ModLoaderEntry":
        data = _expect_dict(data, "minecraft.modLoaders[]")
        return cls(id=str(data.get("id") or ""), primary=bool(data.get("primary")))


@dataclass(frozen=True)
class FileReference:
    """
    远程模组文件引用。

    由 (projectID, fileID) 唯一确定，解析后不可变。
    """

    project_id: int
    file_id: int
    required: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "FileReference":
        data = _expect_dict(data, "files[]")
        return cls(
            project_id=_expect_int(data, "projectID", "files[]"),
            file_id=_expect_int(data, "fileID", "files[]"),
            required=bool(data.get("required", True)),
        )

    @property
    def default_filename(self) -> str:
        return f"{self.project_id}-{self.file_id}.jar"

    def download_url(self, template: str) -> str:
        return template.format(project_id=self.project_id, file_id=self.file_id)

    def __str__(self) -> str:
        return f"{self.project_id}/{self.file_id}"


@dataclass
class MinecraftData:
    """Minecraft 版本与加载器信息"""

    version: Optional[str] = None
    mod_loaders: Optional[List[ModLoaderEntry]] = None
    recommended_ram: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "MinecraftData":
        data = _expect_dict(data, "minecraft")
        raw_loaders = data.get("modLoaders")
        mod_loaders = None
        if raw_loaders is not None:
            if not isinstance(raw_loaders, list):
                raise ManifestMalformedError(
                    "minecraft.modLoaders 应为列表",
                    context={"field": "minecraft.modLoaders"},
                )
            mod_loaders = [ModLoaderEntry.from_dict(item) for item in raw_loaders]

        ram = data.get("recommendedRam") or 0
        return cls(
            version=_optional_str(data, "version"),
            mod_loaders=mod_loaders,
            recommended_ram=ram if isinstance(ram, int) else 0,
        )


@dataclass
class Manifest:
    """
    整合包 manifest。

    files 为 None 表示 manifest 中完全没有 files 字段，
    空列表表示字段存在但没有任何文件。
    """

    minecraft: Optional[MinecraftData] = None
    manifest_type: Optional[str] = None
    manifest_version: Optional[str] = None
    name: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    project_id: int = 0
    files: Optional[List[FileReference]] = None
    overrides: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Manifest":
        """
        将 manifest.json 的内容转换为 Manifest 对象。

        Raises:
            ManifestMalformedError: 结构不符合预期
        """
        data = _expect_dict(data, "manifest")

        minecraft = None
        if data.get("minecraft") is not None:
            minecraft = MinecraftData.from_dict(data["minecraft"])

        files = None
        if data.get("files") is not None:
            if not isinstance(data["files"], list):
                raise ManifestMalformedError(
                    "files 应为列表", context={"field": "files"}
                )
            files = [FileReference.from_dict(item) for item in data["files"]]

        project_id = data.get("projectID") or 0

        return cls(
            minecraft=minecraft,
            manifest_type=_optional_str(data, "manifestType"),
            manifest_version=_optional_str(data, "manifestVersion"),
            name=_optional_str(data, "name"),
            version=_optional_str(data, "version"),
            author=_optional_str(data, "author"),
            project_id=project_id if isinstance(project_id, int) else 0,
            files=files,
            overrides=_optional_str(data, "overrides"),
        )

    def get_loader_versions(self) -> List[str]:
        """
        获取模组加载器标识列表

        没有任何加载器数据时返回 ["N/A"]，否则按原顺序返回每个条目的 id。
        """
        if self.minecraft is None or not self.minecraft.mod_loaders:
            return [NO_LOADER]
        return [loader.id for loader in self.minecraft.mod_loaders]

    @property
    def primary_loader(self) -> str:
        return self.get_loader_versions()[0]

    @property
    def minecraft_version(self) -> Optional[str]:
        return self.minecraft.version if self.minecraft else None

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.version}"
