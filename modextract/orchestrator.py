"""
主协调器

整合各阶段组件，实现从整合包到 MultiMC 实例的完整流程。
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import unquote

import click
from loguru import logger

from modextract.config import ExtractorConfig
from modextract.download import ModDownloader, RetrievalResult
from modextract.exceptions import ModExtractError
from modextract.extractor import ArchiveExtractor
from modextract.instance import InstanceWriter
from modextract.models import Manifest
from modextract.overrides import OverridesMerger
from modextract.packager import ZipBuilder, cleanup_workspace
from modextract.services import ManifestLoader

BANNER = "#" * 96
GAME_DIR = "minecraft"
MODS_DIR = "mods"


@dataclass
class PipelineResult:
    """一次运行的产物"""

    instance_dir: Path
    archive_path: Path
    manifest: Manifest
    retrieval: RetrievalResult


class ExtractOrchestrator:
    """ModExtract 主协调器"""

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()
        self.extractor = ArchiveExtractor()
        self.manifest_loader = ManifestLoader()
        self.merger = OverridesMerger()
        self.instance_writer = InstanceWriter()
        self.zip_builder = ZipBuilder()

    def get_output_dir(self, archive_path: str) -> Path:
        """实例目录: <输出根目录>/<整合包文件名（不含扩展名）>"""
        root = Path(self.config.output_dir) if self.config.output_dir else Path.cwd()
        out_name = Path(unquote(os.path.basename(archive_path))).stem
        return root.resolve() / out_name

    async def run(self, archive_path: str, skip_extract: bool = False) -> PipelineResult:
        """运行完整流程，任何阶段的致命错误都会中止后续阶段"""
        logger.info(f"[开始] 整合包文件: {archive_path}")

        try:
            return await self._run(archive_path, skip_extract)
        except ModExtractError as e:
            logger.critical(f"[中止] {e}")
            raise

    async def _run(self, archive_path: str, skip_extract: bool) -> PipelineResult:
        working_dir = await self.extractor.extract(archive_path, skip_extract)
        manifest = await self.manifest_loader.load(working_dir)

        instance_dir = self.get_output_dir(archive_path)
        game_dir = instance_dir / GAME_DIR
        logger.info(f"[输出] 输出目录: {instance_dir}")

        async with ModDownloader(self.config) as downloader:
            retrieval = await downloader.retrieve(manifest.files, game_dir / MODS_DIR)

        await self.merger.merge(working_dir, manifest.overrides, game_dir)
        await self.instance_writer.write(manifest, instance_dir)

        logger.success("[完成] 实例已生成")
        logger.info(f"[输出] 输出路径: {instance_dir}")
        archive = await self.zip_builder.build(instance_dir, self.config.archive_suffix)
        logger.success(f"[打包] ZIP 生成成功: {archive}")

        self.report(manifest, retrieval)

        if self.config.cleanup:
            for removed in cleanup_workspace(working_dir):
                logger.debug(f"[清理] 已删除 {removed}")

        if self.config.open_output:
            click.launch(str(instance_dir))

        return PipelineResult(
            instance_dir=instance_dir,
            archive_path=archive,
            manifest=manifest,
            retrieval=retrieval,
        )

    def report(self, manifest: Manifest, retrieval: RetrievalResult):
        """输出最终说明与缺失模组列表"""
        logger.info(BANNER)

        logger.warning(
            "IMPORTANT NOTE: If you want to import this instance to MultiMC, "
            "you must install Forge manually"
        )
        logger.warning(f"The Forge version you need is {manifest.primary_loader}")
        logger.warning(
            "A later version will probably also work just as fine, "
            "but this is the version shipped with the pack"
        )
        logger.warning("This is also added to the instance notes")

        if retrieval.missing:
            logger.warning(
                "WARNING: Some mods could not be downloaded. Either the specific "
                "versions were taken down from CurseForge, or there were errors "
                "in the download."
            )
            logger.warning("The missing mods are the following:")
            for mod in retrieval.missing:
                logger.info(f" - {mod}")
            logger.warning(
                "If these mods are crucial to the modpack functioning, try "
                "downloading the server version of the pack and pulling them from there."
            )

        logger.info(BANNER)
        logger.success("Complete")
