"""Thin httpx wrapper around the Cloudinary Admin and Upload APIs."""

import hashlib
import logging
import time
from pathlib import Path
from typing import Any

import httpx

from cloudfolio.config import CloudConfig
from cloudfolio.errors import TransportError
from cloudfolio.models import Folder, ListingPage, UploadResult, UsageReport

logger = logging.getLogger(__name__)

API_ROOT = "https://api.cloudinary.com/v1_1"
PAGE_SIZE = 500

# Derived sizes generated at upload time so first page views hit a warm cache
EAGER_TRANSFORMS = "c_fill,h_400,w_400,q_auto,f_auto|c_limit,w_800,q_auto,f_auto"


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Cloudinary request signature: sha1 of sorted key=value pairs plus the secret."""
    payload = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ""))
    return hashlib.sha1((payload + api_secret).encode("utf-8")).hexdigest()


def _error_message(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        detail = ""
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            detail = body["error"].get("message", "")
        status = exc.response.status_code
        return f"HTTP {status} from {exc.request.url.path}" + (f": {detail}" if detail else "")
    return str(exc) or exc.__class__.__name__


class CloudinaryClient:
    """Sequential, blocking access to one Cloudinary account."""

    def __init__(self, config: CloudConfig, transport: httpx.BaseTransport | None = None, timeout: float = 30):
        self.config = config
        self._http = httpx.Client(
            base_url=f"{API_ROOT}/{config.cloud_name}",
            auth=(config.api_key, config.api_secret),
            timeout=timeout,
            transport=transport,
        )

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        try:
            resp = self._http.request(method, path, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
            raise TransportError(_error_message(e), status_code=status) from e
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {path}", status_code=resp.status_code) from e

    # -- listing -------------------------------------------------------------

    def resources_page(self, prefix: str | None = None, next_cursor: str | None = None,
                       max_results: int = PAGE_SIZE) -> ListingPage:
        params: dict[str, Any] = {"type": "upload", "max_results": max_results}
        if prefix:
            params["prefix"] = prefix
        if next_cursor:
            params["next_cursor"] = next_cursor
        return ListingPage.from_api(self._request("GET", "/resources/image/upload", params=params))

    def asset_folder_page(self, asset_folder: str, next_cursor: str | None = None,
                          max_results: int = PAGE_SIZE) -> ListingPage:
        params: dict[str, Any] = {"asset_folder": asset_folder, "max_results": max_results}
        if next_cursor:
            params["next_cursor"] = next_cursor
        return ListingPage.from_api(self._request("GET", "/resources/by_asset_folder", params=params))

    def search_page(self, expression: str, next_cursor: str | None = None,
                    max_results: int = PAGE_SIZE) -> ListingPage:
        body: dict[str, Any] = {
            "expression": expression,
            "sort_by": [{"created_at": "desc"}],
            "max_results": max_results,
        }
        if next_cursor:
            body["next_cursor"] = next_cursor
        return ListingPage.from_api(self._request("POST", "/resources/search", json=body))

    def root_folders(self) -> list[Folder]:
        data = self._request("GET", "/folders")
        return [Folder.from_api(f) for f in data.get("folders", [])]

    def sub_folders(self, path: str) -> list[Folder]:
        data = self._request("GET", f"/folders/{path}")
        return [Folder.from_api(f) for f in data.get("folders", [])]

    def usage(self) -> UsageReport:
        return UsageReport.from_api(self._request("GET", "/usage"))

    # -- upload --------------------------------------------------------------

    def upload(self, path: Path, folder: str, timestamp: int | None = None) -> UploadResult:
        """Signed upload of a local image into ``folder``, keeping its filename."""
        params: dict[str, Any] = {
            "eager": EAGER_TRANSFORMS,
            "folder": folder,
            "timestamp": timestamp if timestamp is not None else int(time.time()),
            "unique_filename": "false",
            "use_filename": "true",
        }
        params["signature"] = sign_params(params, self.config.api_secret)
        params["api_key"] = self.config.api_key

        with open(path, "rb") as f:
            data = self._request(
                "POST", "/image/upload",
                data={k: str(v) for k, v in params.items()},
                files={"file": (path.name, f)},
                # Upload calls authenticate by signature, not basic auth
                auth=None,
            )
        logger.debug(f"Uploaded {path} as {data.get('public_id')}")
        return UploadResult.from_api(data)
