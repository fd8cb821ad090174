"""
Installer job — download a loader installer jar and run it with Java.

InstallRequest holds the resolved triple plus everything derived from it
(launcher version id, installer URL, installer arguments).  JavaInstallerJob
is the thin I/O wrapper that executes a request, forwarding the installer's
output line by line to a publish callback.
"""

import asyncio
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import requests

from src.catalog.models import LoaderFamily
from src.exceptions import InstallError, InstallerNotFoundError

__all__ = ["FABRIC_LOADER_VERSION", "InstallRequest", "JavaInstallerJob"]

logger = logging.getLogger(__name__)

# Loader version the Fabric installer writes into the launcher version id
FABRIC_LOADER_VERSION = "0.16.10"

_FORGE_MAVEN  = "https://maven.minecraftforge.net/net/minecraftforge/forge"
_FABRIC_MAVEN = "https://maven.fabricmc.net/net/fabricmc/fabric-installer"


@dataclass(frozen=True)
class InstallRequest:
    """A fully resolved (platform version, loader family, loader version) triple."""
    platform_version: str
    loader_family:    LoaderFamily
    loader_version:   str

    @property
    def version_id(self) -> str:
        """Directory name the launcher uses under ``versions/``."""
        if self.loader_family is LoaderFamily.FORGE:
            return f"{self.platform_version}-forge-{self.loader_version}"
        return f"fabric-loader-{FABRIC_LOADER_VERSION}-{self.platform_version}"

    @property
    def installer_url(self) -> str:
        if self.loader_family is LoaderFamily.FORGE:
            full = f"{self.platform_version}-{self.loader_version}"
            return f"{_FORGE_MAVEN}/{full}/forge-{full}-installer.jar"
        v = self.loader_version
        return f"{_FABRIC_MAVEN}/{v}/fabric-installer-{v}.jar"

    def installer_args(self, minecraft_dir: Path) -> list[str]:
        """Arguments passed after ``java -jar <installer>``."""
        if self.loader_family is LoaderFamily.FORGE:
            return ["--installClient", str(minecraft_dir)]
        return ["client", "-dir", str(minecraft_dir), "-mcversion", self.platform_version]

    def is_installed(self, minecraft_dir: Path) -> bool:
        return (Path(minecraft_dir) / "versions" / self.version_id).exists()


class JavaInstallerJob:
    """
    Runs one InstallRequest: download installer → ``java -jar`` → clean up.

    Raises InstallError on download failure or non-zero exit and
    InstallerNotFoundError when the Java executable cannot be started.
    """

    def __init__(
        self,
        java_cmd: str,
        minecraft_dir: Path,
        publish: Callable[[str], None],
        http_timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._java      = java_cmd
        self._mc_dir    = Path(minecraft_dir)
        self._publish   = publish
        self._timeout   = http_timeout
        self._session   = session or requests.Session()

    def _download(self, url: str) -> Path:
        fd, name = tempfile.mkstemp(prefix="loader-installer-", suffix=".jar")
        try:
            with os.fdopen(fd, "wb") as fh:
                with self._session.get(url, timeout=self._timeout, stream=True) as resp:
                    resp.raise_for_status()
                    for chunk in resp.iter_content(chunk_size=64 * 1024):
                        fh.write(chunk)
        except (requests.RequestException, OSError) as exc:
            Path(name).unlink(missing_ok=True)
            raise InstallError(f"Downloading {url} failed: {exc}") from exc
        return Path(name)

    async def _run_installer(self, jar: Path, request: InstallRequest) -> int:
        args = ["-jar", str(jar), *request.installer_args(self._mc_dir)]
        self._publish(f"Running: {self._java} {' '.join(args)}")
        try:
            proc = await asyncio.create_subprocess_exec(
                self._java, *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except FileNotFoundError as exc:
            raise InstallerNotFoundError(f"Java not found: {self._java}") from exc
        assert proc.stdout is not None
        try:
            async for raw in proc.stdout:
                line = raw.decode(errors="replace").rstrip()
                if line:
                    self._publish(line)
            return await proc.wait()
        finally:
            if proc.returncode is None:
                logger.warning("Killing installer process %s", proc.pid)
                proc.kill()
                await proc.wait()

    async def __call__(self, request: InstallRequest) -> None:
        self._publish(f"Downloading installer: {request.installer_url}")
        jar = await asyncio.to_thread(self._download, request.installer_url)
        self._publish(f"Downloaded: {jar}")
        try:
            code = await self._run_installer(jar, request)
        finally:
            jar.unlink(missing_ok=True)
        if code != 0:
            raise InstallError(
                f"{request.loader_family.label} installer exited with code {code}"
            )
        self._publish(f"{request.loader_family.label} installation succeeded.")
