"""Summaries of the remote folder structure and of a generated site."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from cloudfolio.categorize import CATEGORIES, UNCATEGORIZED
from cloudfolio.metadata import load_metadata
from cloudfolio.models import AssetRecord

LAZY_IMAGE_RE = re.compile(r'data-src="https://res\.cloudinary\.com')


def group_by_folder(records: Iterable[AssetRecord]) -> dict[str, list[AssetRecord]]:
    """Folder path -> records, sorted by folder. Root assets go under ""."""
    folders: dict[str, list[AssetRecord]] = {}
    for record in records:
        folders.setdefault(record.folder, []).append(record)
    return dict(sorted(folders.items()))


def format_kb(num_bytes: int) -> str:
    return f"{num_bytes / 1024:.1f} KB"


def format_mb(num_bytes: int) -> str:
    return f"{num_bytes / 1024 / 1024:.2f} MB"


@dataclass
class SiteReport:
    metadata_found: bool = False
    total_images: int = 0
    categories: dict[str, int] = field(default_factory=dict)
    # category -> lazy-loaded image count, None when the page is missing
    pages: dict[str, int | None] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.metadata_found and all(
            self.pages.get(c) == n for c, n in self.categories.items()
        )


def verify_site(metadata_path: Path, site_dir: Path) -> SiteReport:
    """Check the metadata file and that every category page has its images."""
    report = SiteReport()
    expected = [c for c in CATEGORIES if c != UNCATEGORIZED]
    if metadata_path.exists():
        metadata = load_metadata(metadata_path)
        report.metadata_found = True
        report.total_images = metadata.get("totalImages", 0)
        report.categories = dict(metadata.get("categories", {}))
        expected = list(dict.fromkeys(expected + list(report.categories)))

    for category in expected:
        page = site_dir / f"{category}.html"
        if page.exists():
            report.pages[category] = len(LAZY_IMAGE_RE.findall(page.read_text(encoding="utf-8")))
        else:
            report.pages[category] = None
    return report
