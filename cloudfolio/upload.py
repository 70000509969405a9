"""Bulk upload of the local portfolio folders."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from cloudfolio.client import CloudinaryClient
from cloudfolio.errors import TransportError

logger = logging.getLogger(__name__)

UPLOAD_ROOT = "portfolio"
UPLOAD_DELAY = 0.1  # seconds between uploads, keeps us under the API rate limit

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

# Category -> local folder. Folder names keep the spelling used on disk.
UPLOAD_FOLDERS = {
    "documentary": Path("public/Photos/portfolio/documentry"),
    "portraits": Path("public/Photos/portfolio/potraits"),
    "product": Path("public/Photos/portfolio/product"),
    "macro": Path("public/Photos/portfolio/macro"),
    "street": Path("public/Photos/portfolio/street"),
    "interior": Path("public/Photos/portfolio/interior"),
    "jewels": Path("public/Photos/portfolio/jelws"),
}


@dataclass
class UploadStats:
    uploaded: int = 0
    failed: int = 0
    skipped: int = 0

    def add(self, other: "UploadStats"):
        self.uploaded += other.uploaded
        self.failed += other.failed
        self.skipped += other.skipped


def local_images(folder: Path) -> list[Path]:
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in IMAGE_EXTENSIONS
    )


def image_size(path: Path) -> tuple[int, int] | None:
    """Pixel size of a local image, or None if Pillow cannot read it."""
    try:
        with Image.open(path) as img:
            return img.size
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Cannot read {path}: {e}")
        return None


def upload_category(client: CloudinaryClient, category: str, folder: Path,
                    sleep: Callable[[float], None] = time.sleep,
                    progress: Callable[[str], None] = print) -> UploadStats:
    """Upload every image in ``folder`` to portfolio/<category>."""
    stats = UploadStats()
    if not folder.is_dir():
        progress(f"  Folder not found: {folder}")
        return stats

    files = local_images(folder)
    progress(f"  Found {len(files)} images in {folder}")
    for path in files:
        size = image_size(path)
        if size is None:
            progress(f"  Skipping {path.name}: not a readable image")
            stats.skipped += 1
            continue

        try:
            result = client.upload(path, f"{UPLOAD_ROOT}/{category}")
        except TransportError as e:
            progress(f"  Uploading {path.name}... failed: {e}")
            stats.failed += 1
        else:
            progress(f"  Uploading {path.name} ({size[0]}x{size[1]})... ok -> {result.public_id}")
            stats.uploaded += 1

        sleep(UPLOAD_DELAY)

    progress(f"  Uploaded: {stats.uploaded} | Failed: {stats.failed} | Skipped: {stats.skipped}")
    return stats
