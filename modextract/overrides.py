"""
overrides 合并

把整合包中的 overrides 目录逐个文件复制到实例目录，已存在的文件不会被覆盖。
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger


@dataclass
class MergeStats:
    """合并统计"""

    copied: int = 0
    skipped: int = 0
    failed: int = 0


class OverridesMerger:
    """overrides 合并器"""

    async def merge(
        self, working_dir: Path, overrides: Optional[str], dest_dir: Path
    ) -> MergeStats:
        """
        复制 overrides 目录

        Args:
            working_dir: 整合包工作目录
            overrides: manifest 中的 overrides 相对路径，None 时不做任何事
            dest_dir: 目标目录（实例的 minecraft 目录）
        """
        stats = MergeStats()
        logger.info("[覆盖] 正在复制整合包 overrides")

        if overrides is None:
            logger.info("[覆盖] manifest 未指定 overrides，跳过")
            return stats

        working_dir = Path(working_dir).resolve()
        source_dir = (working_dir / overrides).resolve()
        if os.path.commonpath([working_dir, source_dir]) != str(working_dir):
            logger.error(f"[覆盖] overrides 路径越出工作目录，跳过: {overrides}")
            return stats

        if not source_dir.is_dir():
            logger.warning(f"[覆盖] overrides 目录不存在: {source_dir}")
            return stats

        dest_dir = Path(dest_dir)
        for root, dirs, files in os.walk(source_dir):
            dirs.sort()
            relative_path = os.path.relpath(root, source_dir)
            target_dir = dest_dir / relative_path

            for file in sorted(files):
                src_file = Path(root) / file
                dest_file = target_dir / file

                if dest_file.exists():
                    stats.skipped += 1
                    logger.debug(f"[覆盖] 已存在，跳过: {dest_file}")
                    continue

                logger.info(f"[覆盖] Override: {file}")
                try:
                    target_dir.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(src_file, dest_file)
                    stats.copied += 1
                except OSError as e:
                    stats.failed += 1
                    logger.error(f"[覆盖] 复制 {file} 失败: {e}, {type(e).__name__}")

        logger.info(
            f"[覆盖] overrides 复制完成: {stats.copied} 复制, "
            f"{stats.skipped} 跳过, {stats.failed} 失败"
        )
        return stats
