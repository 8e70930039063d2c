"""
CLI 模块

命令行接口实现。
"""

import asyncio
import os
from typing import Optional

import click
from loguru import logger

from modextract import __version__
from modextract.config import ExtractorConfig, load_config
from modextract.exceptions import ModExtractError
from modextract.logger import setup_logger
from modextract.orchestrator import ExtractOrchestrator


def build_config(
    config_path: Optional[str],
    output_dir: Optional[str],
    concurrency: Optional[int],
    open_output: bool,
) -> ExtractorConfig:
    """合并配置文件与命令行参数"""
    data = load_config(config_path) if config_path else {}
    if output_dir:
        data["output_dir"] = output_dir
    if concurrency:
        data["max_concurrent"] = concurrency
    if open_output:
        data["open_output"] = True
    return ExtractorConfig.from_dict(data)


async def run_async(archive: str, config: ExtractorConfig, skip_extract: bool):
    """异步运行"""
    orchestrator = ExtractOrchestrator(config)
    await orchestrator.run(archive, skip_extract)


@click.command()
@click.argument("archive", type=click.Path(dir_okay=False))
@click.option("-c", "--config", "config_path", type=click.Path(exists=True), help="配置文件 (toml/json/yaml)")
@click.option("-o", "--output-dir", type=click.Path(file_okay=False), help="实例输出根目录")
@click.option("-j", "--concurrency", type=click.IntRange(min=1), help="并发下载数")
@click.option(
    "--skip-extract/--extract",
    default=None,
    help="跳过解压（默认: 当前目录存在 overrides 时跳过）",
)
@click.option("--open", "open_output", is_flag=True, help="完成后打开输出目录")
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.version_option(version=__version__)
def main(
    archive: str,
    config_path: Optional[str],
    output_dir: Optional[str],
    concurrency: Optional[int],
    skip_extract: Optional[bool],
    open_output: bool,
    debug: bool,
):
    """ModExtract - 将 CurseForge 整合包转换为 MultiMC 实例"""
    setup_logger(level="DEBUG" if debug else None)

    if skip_extract is None:
        skip_extract = os.path.isdir("overrides")

    try:
        config = build_config(config_path, output_dir, concurrency, open_output)
        asyncio.run(run_async(archive, config, skip_extract))
    except ModExtractError as e:
        logger.debug(f"[错误] {e.to_dict()}")
        raise click.ClickException(str(e))


if __name__ == "__main__":
    main()
