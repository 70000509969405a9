"""Shared fixtures: a fake Cloudinary account served through httpx.MockTransport."""

import httpx
import pytest

from cloudfolio.client import CloudinaryClient
from cloudfolio.config import CloudConfig
from cloudfolio.models import AssetRecord


def resource(public_id, **overrides):
    """A resource dict shaped like the Admin API listing entries."""
    data = {
        "public_id": public_id,
        "format": "jpg",
        "bytes": 204800,
        "width": 1600,
        "height": 1067,
        "created_at": "2025-10-01T12:00:00Z",
        "secure_url": f"https://res.cloudinary.com/demo/image/upload/v1/{public_id}.jpg",
    }
    data.update(overrides)
    return data


def record(public_id, **overrides):
    return AssetRecord.from_api(resource(public_id, **overrides))


@pytest.fixture
def cloud_config():
    return CloudConfig(cloud_name="demo", api_key="123456", api_secret="s3cr3t")


@pytest.fixture
def make_client(cloud_config):
    """Build a client whose HTTP calls go to ``handler(request) -> httpx.Response``."""
    clients = []

    def factory(handler):
        client = CloudinaryClient(cloud_config, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()
