"""
ZIP 生成器

将实例目录压缩为可分发的 zip，并清理解压出来的临时文件。
"""

import os
import shutil
import zipfile
from pathlib import Path

from loguru import logger

from modextract.exceptions import PackagerError, ZipError

WORKSPACE_LEFTOVERS = ("overrides", "modlist.html", "manifest.json")


class ZipBuilder:
    """ZIP 构建器"""

    async def build(self, source_dir: Path, suffix: str = "MultiMC") -> Path:
        """
        构建 ZIP 文件

        Args:
            source_dir: 实例目录
            suffix: 压缩包名称后缀

        Returns:
            生成的文件路径: <父目录>/<目录名> <后缀>.zip
        """
        source_dir = Path(source_dir).resolve()
        if source_dir.parent == source_dir:
            raise PackagerError(
                f"输出目录没有父目录: {source_dir}",
                context={"source_dir": str(source_dir)},
            )

        zip_path = source_dir.parent / f"{source_dir.name} {suffix}.zip"
        logger.info(f"[打包] 正在生成 {zip_path.name}")

        try:
            with zipfile.ZipFile(
                zip_path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9
            ) as zf:
                for root, dirs, files in os.walk(source_dir):
                    dirs.sort()
                    root_path = Path(root)
                    if root_path != source_dir and not dirs and not files:
                        zf.write(root_path, root_path.relative_to(source_dir).as_posix())
                    for file in sorted(files):
                        file_path = root_path / file
                        zf.write(file_path, file_path.relative_to(source_dir).as_posix())
        except (OSError, zipfile.LargeZipFile) as e:
            if zip_path.is_file():
                zip_path.unlink()
            raise ZipError(
                f"构建 ZIP 失败: {e}",
                context={"source_dir": str(source_dir), "zip_path": str(zip_path)},
            ) from e

        return zip_path


def cleanup_workspace(working_dir: Path) -> list:
    """
    删除解压整合包时留下的文件

    Returns:
        实际删除的路径列表
    """
    removed = []
    for name in WORKSPACE_LEFTOVERS:
        path = Path(working_dir) / name
        if not path.exists():
            continue
        try:
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()
            removed.append(path)
        except OSError as e:
            logger.warning(f"[清理] 无法删除 {path}: {e}")
    return removed
