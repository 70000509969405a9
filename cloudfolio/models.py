"""Typed records for Cloudinary API responses and pipeline output."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AssetRecord:
    """One stored image as returned by the listing APIs."""
    public_id: str
    bytes: int
    width: int
    height: int
    format: str
    created_at: str
    secure_url: str
    asset_folder: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "AssetRecord":
        return cls(
            public_id=data["public_id"],
            bytes=int(data.get("bytes") or 0),
            # Dimensions are missing for some formats; 0 means unknown
            width=int(data.get("width") or 0),
            height=int(data.get("height") or 0),
            format=data.get("format") or "",
            created_at=data.get("created_at") or "",
            secure_url=data.get("secure_url") or data.get("url") or "",
            asset_folder=data.get("asset_folder") or None,
        )

    @property
    def filename(self) -> str:
        return self.public_id.rsplit("/", 1)[-1]

    @property
    def folder(self) -> str:
        """Folder part of the identifier, "" for assets at the root."""
        return self.public_id.rsplit("/", 1)[0] if "/" in self.public_id else ""


@dataclass(frozen=True)
class ListingPage:
    """A single page of a cursor-paginated listing."""
    resources: list[AssetRecord]
    next_cursor: str | None = None
    total_count: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ListingPage":
        return cls(
            resources=[AssetRecord.from_api(r) for r in data.get("resources", [])],
            next_cursor=data.get("next_cursor") or None,
            total_count=data.get("total_count"),
        )


@dataclass(frozen=True)
class Folder:
    name: str
    path: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Folder":
        return cls(name=data["name"], path=data.get("path") or data["name"])


@dataclass(frozen=True)
class UsageReport:
    plan: str
    credits_used: float
    credits_limit: float
    storage_bytes: int
    bandwidth_bytes: int
    resources: int

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "UsageReport":
        credits = data.get("credits") or {}
        return cls(
            plan=data.get("plan") or "Free",
            credits_used=credits.get("usage", 0),
            credits_limit=credits.get("limit", 0),
            storage_bytes=(data.get("storage") or {}).get("usage", 0),
            bandwidth_bytes=(data.get("bandwidth") or {}).get("usage", 0),
            resources=data.get("resources", 0),
        )


@dataclass(frozen=True)
class UploadResult:
    public_id: str
    secure_url: str
    bytes: int
    width: int
    height: int
    format: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "UploadResult":
        return cls(
            public_id=data["public_id"],
            secure_url=data.get("secure_url", ""),
            bytes=int(data.get("bytes") or 0),
            width=int(data.get("width") or 0),
            height=int(data.get("height") or 0),
            format=data.get("format") or "",
        )


@dataclass(frozen=True)
class CategorizedAsset:
    """An AssetRecord after categorization and URL synthesis."""
    record: AssetRecord
    category: str
    derived_id: str
    size_kb: int
    urls: dict[str, str] = field(default_factory=dict)

    @property
    def filename(self) -> str:
        return self.record.filename

    def to_dict(self) -> dict[str, Any]:
        r = self.record
        return {
            "id": self.derived_id,
            "publicId": r.public_id,
            "assetFolder": r.asset_folder,
            "category": self.category,
            "filename": r.filename,
            "format": r.format,
            "width": r.width,
            "height": r.height,
            "size": r.bytes,
            "sizeKB": self.size_kb,
            "created": r.created_at,
            "urls": dict(self.urls),
            "original": r.secure_url,
        }

    def to_simple_dict(self) -> dict[str, Any]:
        return {
            "id": self.derived_id,
            "publicId": self.record.public_id,
            "category": self.category,
            "thumbnail": self.urls.get("thumbnail"),
            "gallery": self.urls.get("gallery"),
            "url": self.record.secure_url,
            "original": self.record.secure_url,
        }


@dataclass(frozen=True)
class MetadataDocument:
    generated: str
    cloud_name: str
    transformations: dict[str, str]
    images: list[CategorizedAsset]
    source_folder: str | None = None

    @property
    def total_images(self) -> int:
        return len(self.images)

    @property
    def categories(self) -> dict[str, int]:
        """Category -> image count, in the order categories first appear."""
        counts: dict[str, int] = {}
        for image in self.images:
            counts[image.category] = counts.get(image.category, 0) + 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "generated": self.generated,
            "cloudName": self.cloud_name,
            "sourceFolder": self.source_folder,
            "totalImages": self.total_images,
            "transformations": dict(self.transformations),
            "categories": self.categories,
            "images": [image.to_dict() for image in self.images],
        }

    def to_simple_list(self) -> list[dict[str, Any]]:
        return [image.to_simple_dict() for image in self.images]
