"""
MultiMC 实例配置

生成 instance.cfg。
"""

from pathlib import Path

import aiofiles
from loguru import logger

from modextract.exceptions import InstanceWriteError
from modextract.models import Manifest

INSTANCE_CFG = "instance.cfg"
GENERATOR = "modextract"


def render_instance_cfg(manifest: Manifest) -> str:
    """将 manifest 序列化为 instance.cfg 内容"""
    lines = [
        ("InstanceType", "OneSix"),
        ("IntendedVersion", manifest.minecraft_version or ""),
        ("LogPrePostOutput", "true"),
        ("OverrideCommands", "false"),
        ("OverrideConsole", "false"),
        ("OverrideJavaArgs", "false"),
        ("OverrideJavaLocation", "false"),
        ("OverrideMemory", "false"),
        ("OverrideWindow", "false"),
        ("iconKey", "default"),
        ("lastLaunchTime", "0"),
        ("name", manifest.display_name),
        (
            "notes",
            f"Modpack by {manifest.author}. Generated by {GENERATOR}. "
            f"Using Forge {manifest.primary_loader}.",
        ),
        ("totalTimePlayed", "0"),
    ]
    return "".join(f"{key}={value}\n" for key, value in lines)


class InstanceWriter:
    """instance.cfg 写入器"""

    async def write(self, manifest: Manifest, instance_dir: Path) -> Path:
        logger.info("[实例] 正在生成 MultiMC 实例信息")
        cfg_path = Path(instance_dir) / INSTANCE_CFG
        try:
            cfg_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(cfg_path, "w", encoding="utf-8") as f:
                await f.write(render_instance_cfg(manifest))
        except OSError as e:
            raise InstanceWriteError(
                f"写入 {INSTANCE_CFG} 失败: {e}", context={"path": str(cfg_path)}
            ) from e
        return cfg_path
