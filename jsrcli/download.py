"""
Deno binary download.

``jsr publish`` delegates to ``deno publish``. Unless ``DENO_BIN_PATH``
points at an existing binary, a platform specific build is downloaded once
and cached per version.
"""

import logging
import os
import platform
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests
from rich.progress import BarColumn, DownloadColumn, Progress, TextColumn, TimeElapsedColumn

from jsrcli.config_manager import Settings
from jsrcli.rich_utils.ui_helpers import get_console
from jsrcli.utils.exceptions import RegistryNetworkError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

DENO_CANARY_INFO_URL = "https://dl.deno.land/canary-latest.txt"
# Release builds are pinned until https://github.com/jsr-io/jsr-npm/issues/129
# is fixed upstream in Deno.
DENO_RELEASE_VERSION = "v2.3.7"

# Example: https://dl.deno.land/release/v2.3.7/deno-aarch64-apple-darwin.zip
FILENAMES = {
    ("darwin", "arm64"): "deno-aarch64-apple-darwin",
    ("darwin", "x64"): "deno-x86_64-apple-darwin",
    ("linux", "arm64"): "deno-aarch64-unknown-linux-gnu",
    ("linux", "x64"): "deno-x86_64-unknown-linux-gnu",
    ("windows", "x64"): "deno-x86_64-pc-windows-msvc",
}

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


@dataclass
class DownloadInfo:
    url: str
    filename: str
    version: str
    canary: bool


def current_platform():
    system = platform.system().lower()
    machine = platform.machine().lower()
    return system, _ARCH_ALIASES.get(machine, machine)


def deno_executable_name() -> str:
    return "deno.exe" if platform.system().lower() == "windows" else "deno"


def get_deno_download_url(canary: bool, session: requests.Session) -> DownloadInfo:
    """Work out which archive to download for this platform."""
    key = current_platform()
    if key not in FILENAMES:
        raise UnsupportedPlatformError(f"Unsupported platform: {key[0]} {key[1]}")

    filename = FILENAMES[key] + ".zip"

    if canary:
        response = session.get(DENO_CANARY_INFO_URL, timeout=30)
        if not response.ok:
            response.close()
            raise RegistryNetworkError(response.status_code, DENO_CANARY_INFO_URL)
        version = response.text.strip()
        url = f"https://dl.deno.land/canary/{version}/{filename}"
    else:
        version = DENO_RELEASE_VERSION
        url = f"https://dl.deno.land/release/{version}/{filename}"

    return DownloadInfo(url=url, filename=filename, version=version, canary=canary)


def download_deno(bin_path: Path, info: DownloadInfo, session: requests.Session) -> None:
    """Download and unpack the deno archive so that ``bin_path`` exists."""
    bin_folder = bin_path.parent
    bin_folder.mkdir(parents=True, exist_ok=True)

    response = session.get(info.url, stream=True, timeout=30)
    if not response.ok:
        response.close()
        raise RegistryNetworkError(response.status_code, info.url)

    total = int(response.headers.get("content-length", 0)) or None
    console = get_console()
    console.print(f"Downloading JSR {'canary' if info.canary else 'release'} binary...")

    archive = bin_folder / info.filename
    part_file = bin_folder / (info.filename + ".part")
    with Progress(
        TimeElapsedColumn(),
        BarColumn(),
        DownloadColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(info.filename, total=total)
        with response, open(part_file, "wb") as f:
            for chunk in response.iter_content(chunk_size=64 * 1024):
                f.write(chunk)
                progress.advance(task, len(chunk))

    part_file.replace(archive)
    with zipfile.ZipFile(archive) as zf:
        zf.extractall(bin_folder)
    archive.unlink()

    # Mark as executable
    os.chmod(bin_path, 0o755)
    logger.debug(f"Extracted deno to {bin_path}")


def get_deno_bin_path(settings: Settings, canary: bool = False, session: Optional[requests.Session] = None) -> str:
    """Return a runnable deno binary, downloading it when needed."""
    if settings.deno_bin_path:
        logger.debug(f"Using deno binary from DENO_BIN_PATH: {settings.deno_bin_path}")
        return settings.deno_bin_path

    session = session or requests.Session()
    info = get_deno_download_url(canary, session)
    bin_path = Path(settings.cache_dir) / info.version / deno_executable_name()
    if not bin_path.is_file():
        download_deno(bin_path, info, session)
    else:
        logger.debug(f"Using cached deno binary {bin_path}")
    return str(bin_path)
