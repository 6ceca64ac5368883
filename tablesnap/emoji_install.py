"""
Emoji Pack Installation
=======================

Download the Twemoji archive once and unpack its 72x72 PNGs into the user
cache, where the renderer's emoji lookup finds them. Never called while
rendering.
"""

from pathlib import Path
from typing import Optional
import shutil
import tempfile
import zipfile

import requests

from tablesnap.config.logging import get_logger
from tablesnap.config.settings import get_settings

logger = get_logger(__name__)

ASSET_PREFIX = "assets/72x72/"
CHUNK_SIZE = 1024 * 64


class EmojiInstallError(Exception):
    """Exception raised when the emoji pack cannot be downloaded or unpacked."""

    pass


def has_cached_emoji(cache_dir: Path) -> bool:
    """Check whether the emoji pack is already installed."""
    cache_dir = Path(cache_dir)
    return cache_dir.is_dir() and any(cache_dir.glob("*.png"))


def extract_emoji_pngs(archive_path: Path, cache_dir: Path) -> int:
    """
    Copy every ``assets/72x72/*.png`` member of the archive into *cache_dir*.

    Returns:
        Number of images written, the cache dir is only created when non-zero
    """
    count = 0
    with zipfile.ZipFile(archive_path) as archive:
        members = [
            m for m in archive.infolist()
            if ASSET_PREFIX in m.filename and m.filename.endswith(".png")
        ]
        if members:
            cache_dir.mkdir(parents=True, exist_ok=True)
        for member in members:
            target = cache_dir / Path(member.filename).name
            try:
                with archive.open(member) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)
            except (OSError, zipfile.BadZipFile) as e:
                logger.warning("Skipping emoji image", member=member.filename, error=str(e))
                continue
            count += 1
    return count


def install_emoji_pack(
    cache_dir: Optional[Path] = None,
    url: Optional[str] = None,
    timeout: Optional[int] = None,
) -> int:
    """
    Download and install the emoji pack.

    Args:
        cache_dir: Install location, defaults to the configured cache dir
        url: Archive URL, defaults to the configured Twemoji URL
        timeout: Download timeout in seconds

    Returns:
        Number of images installed, 0 when the pack was already present

    Raises:
        EmojiInstallError: If the download or the archive fails
    """
    settings = get_settings()
    cache_dir = Path(cache_dir or settings.emoji_cache_dir)
    url = url or settings.twemoji_url
    timeout = timeout or settings.download_timeout

    if has_cached_emoji(cache_dir):
        logger.info("Emoji pack already installed", cache_dir=str(cache_dir))
        return 0

    with tempfile.TemporaryDirectory(prefix="tablesnap-") as tmp:
        archive_path = Path(tmp) / "twemoji.zip"
        logger.info("Downloading emoji pack", url=url)
        try:
            with requests.get(url, stream=True, timeout=timeout) as response:
                response.raise_for_status()
                with open(archive_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        f.write(chunk)
        except requests.RequestException as e:
            raise EmojiInstallError(f"download failed: {e}")

        try:
            count = extract_emoji_pngs(archive_path, cache_dir)
        except zipfile.BadZipFile as e:
            raise EmojiInstallError(f"invalid emoji archive: {e}")

        if count == 0:
            raise EmojiInstallError("invalid emoji archive: no emoji images found")

    logger.info("Emoji pack installed", count=count, cache_dir=str(cache_dir))
    return count
