import io
from datetime import datetime, timezone

import numpy as np
import pytest
from PIL import ExifTags, Image, PngImagePlugin
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from shredder.config.settings import Settings
from shredder.engine.engine import Shredder, build_shredder

FIXED_NOW = datetime(2026, 10, 18, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single-page PDF whose info dictionary names an author."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setAuthor("John Doe (CEO)")
    c.setTitle("Quarterly Plan")
    c.setSubject("Budget")
    c.setCreator("Word Processor 9")
    c.setKeywords("internal, confidential")
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Two-page PDF with reportlab's default info dictionary."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


def _exif_with_camera_and_gps() -> Image.Exif:
    exif = Image.Exif()
    exif[ExifTags.Base.Make] = "Apple"
    exif[ExifTags.Base.Model] = "iPhone 15"
    exif[ExifTags.Base.Software] = "17.1"
    exif[ExifTags.Base.DateTime] = "2024:01:02 03:04:05"
    exif[ExifTags.Base.ImageDescription] = "Holiday"
    exif[ExifTags.IFD.GPSInfo] = {
        ExifTags.GPS.GPSLatitudeRef: "N",
        ExifTags.GPS.GPSLatitude: (37.0, 46.0, 29.0),
        ExifTags.GPS.GPSLongitudeRef: "W",
        ExifTags.GPS.GPSLongitude: (122.0, 25.0, 9.0),
    }
    return exif


@pytest.fixture()
def jpeg_with_exif_bytes() -> bytes:
    """64x64 mid-grey JPEG carrying camera, software, date and GPS tags."""
    image = Image.new("RGB", (64, 64), (128, 128, 128))
    buf = io.BytesIO()
    image.save(buf, format="JPEG", quality=95, exif=_exif_with_camera_and_gps())
    return buf.getvalue()


@pytest.fixture()
def plain_jpeg_bytes() -> bytes:
    image = Image.new("RGB", (48, 32), (90, 120, 150))
    buf = io.BytesIO()
    image.save(buf, format="JPEG", quality=95)
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """120x80 opaque PNG with a text chunk."""
    rng = np.random.default_rng(7)
    pixels = rng.integers(10, 245, size=(80, 120, 3), dtype=np.uint8)
    image = Image.fromarray(pixels)
    buf = io.BytesIO()
    info = PngImagePlugin.PngInfo()
    info.add_text("Author", "John Doe")
    image.save(buf, format="PNG", pnginfo=info)
    return buf.getvalue()


@pytest.fixture()
def rgba_png_bytes() -> bytes:
    image = Image.new("RGBA", (40, 40), (100, 150, 200, 77))
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def webp_bytes() -> bytes:
    image = Image.new("RGB", (30, 20), (200, 100, 50))
    buf = io.BytesIO()
    image.save(buf, format="WEBP", quality=90, exif=_exif_with_camera_and_gps())
    return buf.getvalue()


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture()
def shredder(settings: Settings) -> Shredder:
    return build_shredder(settings, rng=np.random.default_rng(1234), clock=lambda: FIXED_NOW)

