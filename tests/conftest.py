"""Pytest configuration and fixtures for the watermark service tests."""

import base64
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.core.config import get_settings
from app.main import app
from app.services.archive_service import ArchiveService
from app.services.imaging_service import ImagingService


def make_image_bytes(width, height, color=(255, 255, 255, 255), fmt="PNG", mode="RGBA"):
    """Render a solid-colour image and return its encoded bytes."""
    image = Image.new(mode, (width, height), color if mode == "RGBA" else color[:3])
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def as_data_url(data, media_type="image/png"):
    return f"data:{media_type};base64,{base64.b64encode(data).decode('ascii')}"


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def imaging_service(settings):
    return ImagingService(settings)


@pytest.fixture
def archive_service(settings):
    return ArchiveService(settings)


@pytest.fixture
def logo_bytes():
    """A 40x20 opaque blue logo."""
    return make_image_bytes(40, 20, color=(0, 0, 255, 255))


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def cairosvg_available():
    """Skip SVG rendering tests on hosts without the cairo system library."""
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        pytest.skip("CairoSVG needs the cairo system library")
