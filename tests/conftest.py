"""
Pytest configuration and global fixtures.
"""
import base64
import sys
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from image_extractor.config.settings import Settings


def make_png(width: int, height: int, color='red', mode='RGB') -> bytes:
    """Encode a solid-color PNG."""
    img = Image.new(mode, (width, height), color=color)
    buf = BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


def make_pdf(page_count: int = 3, width: float = 144, height: float = 72) -> bytes:
    """Build a PDF with numbered pages (sizes in points)."""
    import fitz

    doc = fitz.open()
    for i in range(page_count):
        page = doc.new_page(width=width, height=height)
        page.insert_text((10, 40), f"Page {i + 1}")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def test_settings():
    """Settings with defaults, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def temp_dir(tmp_path):
    """Provide temporary directory for test files."""
    return tmp_path


@pytest.fixture
def solid_png_bytes():
    """100x100 solid red PNG."""
    return make_png(100, 100)


@pytest.fixture
def sample_base64_image(solid_png_bytes):
    """Provide base64 encoded 100x100 sample image."""
    return base64.b64encode(solid_png_bytes).decode()


@pytest.fixture
def sample_image_path(temp_dir):
    """Create a sample 800x600 test image."""
    img_path = temp_dir / "test_image.png"
    img = Image.new('RGB', (800, 600), color='white')
    img.save(img_path)
    return str(img_path)


@pytest.fixture
def large_png_bytes():
    """1000x800 image, above the large-image threshold."""
    return make_png(1000, 800, color='blue')


@pytest.fixture
def pdf_bytes():
    """Three page PDF, 144x72 points per page."""
    return make_pdf()


@pytest.fixture
def pdf_path(temp_dir, pdf_bytes):
    path = temp_dir / "document.pdf"
    path.write_bytes(pdf_bytes)
    return str(path)


def decode_result_image(result):
    """Decode the image part of a successful ResultArtifact."""
    data = base64.b64decode(result.content[1]['data'])
    return Image.open(BytesIO(data))


@pytest.fixture
def decode_image_part():
    return decode_result_image


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def pdf_factory():
    return make_pdf
