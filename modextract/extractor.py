"""
整合包解压

将整合包压缩文件解压到其所在目录，或直接复用已解压的目录。
"""

import os
import zipfile
from pathlib import Path

from loguru import logger

from modextract.exceptions import ArchiveError


class ArchiveExtractor:
    """整合包解压器"""

    async def extract(self, archive_path: str, skip_extract: bool = False) -> Path:
        """
        解压整合包

        Args:
            archive_path: 整合包 zip 路径
            skip_extract: 为 True 时视为已解压，直接返回工作目录

        Returns:
            工作目录（整合包所在目录）
        """
        archive = Path(archive_path).resolve()
        working_dir = archive.parent

        if skip_extract:
            logger.info(f"[解压] 跳过解压，使用已有目录: {working_dir}")
            return working_dir

        if not archive.is_file():
            raise ArchiveError(
                f"整合包不存在: {archive_path}", context={"path": str(archive)}
            )
        if not zipfile.is_zipfile(archive):
            raise ArchiveError(
                f"不是有效的 zip 文件: {archive_path}", context={"path": str(archive)}
            )

        logger.info("[解压] 正在解压整合包...")
        try:
            with zipfile.ZipFile(archive) as zf:
                for member in zf.namelist():
                    target = (working_dir / member).resolve()
                    if os.path.commonpath([working_dir, target]) != str(working_dir):
                        raise ArchiveError(
                            f"压缩包条目越界: {member}",
                            context={"member": member},
                        )
                zf.extractall(working_dir)
        except (zipfile.BadZipFile, OSError, RuntimeError, NotImplementedError) as e:
            raise ArchiveError(
                f"解压失败: {e}", context={"path": str(archive)}
            ) from e

        logger.info("[解压] 解压完成")
        return working_dir
