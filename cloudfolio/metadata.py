"""Build and persist the portfolio metadata document."""

import json
import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from cloudfolio.categorize import categorize
from cloudfolio.errors import ConfigError
from cloudfolio.models import AssetRecord, CategorizedAsset, MetadataDocument
from cloudfolio.urls import PRESETS, delivery_base, derived_id, synthesize_urls

logger = logging.getLogger(__name__)


def size_kb(num_bytes: int) -> int:
    """Kilobytes rounded half-up."""
    return (num_bytes + 512) // 1024


def categorize_asset(record: AssetRecord, base: str) -> CategorizedAsset:
    return CategorizedAsset(
        record=record,
        category=categorize(record.public_id, record.filename, record.asset_folder),
        derived_id=derived_id(record.public_id),
        size_kb=size_kb(record.bytes),
        urls=synthesize_urls(record.public_id, base),
    )


def sort_key(asset: CategorizedAsset) -> tuple[str, str]:
    return asset.category, asset.filename


def build_document(records: Iterable[AssetRecord], cloud_name: str,
                   source_folder: str | None = None,
                   generated: datetime | None = None) -> MetadataDocument:
    """Categorize every record and order the result by (category, filename)."""
    base = delivery_base(cloud_name)
    images = sorted((categorize_asset(r, base) for r in records), key=sort_key)
    generated = generated or datetime.now(timezone.utc)
    return MetadataDocument(
        generated=generated.isoformat().replace("+00:00", "Z"),
        cloud_name=cloud_name,
        transformations=dict(PRESETS),
        images=images,
        source_folder=source_folder,
    )


def _write_json(path: Path, data: Any):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_metadata(document: MetadataDocument, output_path: Path, simple_path: Path):
    """Overwrite the full and simplified metadata files."""
    _write_json(Path(output_path), document.to_dict())
    logger.info(f"Wrote {output_path} ({document.total_images} images)")
    _write_json(Path(simple_path), document.to_simple_list())
    logger.info(f"Wrote {simple_path}")


def load_metadata(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Metadata file not found: {path}. Run cloudfolio-metadata first.")
    with open(path, encoding="utf-8") as f:
        return json.load(f)
