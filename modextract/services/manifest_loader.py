"""
manifest 加载服务

负责从工作目录读取 manifest.json 并校验模组加载器版本。
"""

import json
from pathlib import Path

import aiofiles
from loguru import logger

from modextract.models import NO_LOADER, Manifest
from modextract.exceptions import (
    ManifestMalformedError,
    ManifestNotFoundError,
    ManifestValidationError,
)

MANIFEST_FILENAME = "manifest.json"


class ManifestLoader:
    """manifest.json 加载器"""

    @staticmethod
    def is_usable(loader_versions: list) -> bool:
        """加载器列表非空，且第一个既不是 N/A 也不是空字符串"""
        return bool(loader_versions) and loader_versions[0] not in (NO_LOADER, "")

    async def load(self, working_dir: Path) -> Manifest:
        """
        读取并校验 manifest

        Raises:
            ManifestNotFoundError: manifest.json 不存在
            ManifestMalformedError: 无法解析
            ManifestValidationError: 没有可用的加载器版本
        """
        logger.info("[解析] 正在解析 manifest")
        manifest_path = Path(working_dir) / MANIFEST_FILENAME
        if not manifest_path.is_file():
            raise ManifestNotFoundError(
                "未找到 manifest.json", context={"path": str(manifest_path)}
            )

        try:
            async with aiofiles.open(manifest_path, encoding="utf-8-sig") as f:
                content = await f.read()
            data = json.loads(content)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ManifestMalformedError(
                f"manifest.json 解析失败: {e}", context={"path": str(manifest_path)}
            ) from e

        manifest = Manifest.from_dict(data)
        logger.info(f"[解析] 需要的 Minecraft 版本: {manifest.minecraft_version}")

        loader_versions = manifest.get_loader_versions()
        usable = self.is_usable(loader_versions)

        if usable and len(loader_versions) > 1:
            logger.warning(
                "[解析] 发现多个 Forge 版本! 请确保所需版本已在 MultiMC 中安装"
            )
            logger.warning(f"[解析] {','.join(loader_versions)}")

        if not usable:
            logger.critical("[解析] 没有 Forge 版本! 模组加载器信息为空")
            raise ManifestValidationError(
                "manifest 中没有可用的模组加载器版本",
                context={"loaders": loader_versions},
            )

        logger.info(f"[解析] Forge 版本: {loader_versions[0]}")
        return manifest
