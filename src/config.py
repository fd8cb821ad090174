"""
Runtime configuration for the installer.

Values come from three layers, last one wins:
  1. built-in defaults (per-OS Minecraft directory, public endpoints)
  2. environment variables (MLI_DB_PATH, MLI_MINECRAFT_DIR, MLI_JAVA,
     MLI_HTTP_TIMEOUT)
  3. CLI flags (applied by src.cli.main via dataclasses.replace)
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

__all__ = ["APP_NAME", "APP_VERSION", "AppConfig", "default_minecraft_dir"]

logger = logging.getLogger(__name__)

APP_NAME = "mod-loader-installer"
APP_VERSION = "0.1.0"

MOJANG_MANIFEST_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"
FORGE_PROMOTIONS_URL = (
    "https://files.minecraftforge.net/net/minecraftforge/forge/promotions_slim.json"
)
FABRIC_INSTALLER_META_URL = "https://meta.fabricmc.net/v2/versions/installer"


def default_minecraft_dir(platform: Optional[str] = None,
                          env: Optional[Mapping[str, str]] = None) -> Path:
    """Return the vanilla launcher's data directory for *platform*."""
    platform = platform or sys.platform
    env = os.environ if env is None else env
    if platform.startswith("win"):
        appdata = env.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(appdata) / ".minecraft"
    if platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "minecraft"
    return Path.home() / ".minecraft"


@dataclass
class AppConfig:
    """Everything the backend collaborators need to talk to the outside world."""
    db_path:        str   = "~/.mod-loader-installer/selection.db"
    minecraft_dir:  Path  = field(default_factory=default_minecraft_dir)
    java_cmd:       str   = "java.exe" if sys.platform.startswith("win") else "java"
    http_timeout:   float = 20.0          # seconds, per upstream request
    manifest_url:   str   = MOJANG_MANIFEST_URL
    forge_url:      str   = FORGE_PROMOTIONS_URL
    fabric_url:     str   = FABRIC_INSTALLER_META_URL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build a config from defaults overridden by MLI_* variables."""
        env = os.environ if env is None else env
        cfg = cls()
        if env.get("MLI_DB_PATH"):
            cfg.db_path = env["MLI_DB_PATH"]
        if env.get("MLI_MINECRAFT_DIR"):
            cfg.minecraft_dir = Path(env["MLI_MINECRAFT_DIR"]).expanduser()
        if env.get("MLI_JAVA"):
            cfg.java_cmd = env["MLI_JAVA"]
        if env.get("MLI_HTTP_TIMEOUT"):
            try:
                cfg.http_timeout = float(env["MLI_HTTP_TIMEOUT"])
            except ValueError:
                logger.warning(
                    "Ignoring invalid MLI_HTTP_TIMEOUT=%r", env["MLI_HTTP_TIMEOUT"]
                )
        return cfg
