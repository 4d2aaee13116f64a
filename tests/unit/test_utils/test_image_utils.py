"""
Unit tests for utils.image_utils module.
"""
from io import BytesIO

import pytest
from PIL import Image

from image_extractor.core.errors import DecodeFailureError
from image_extractor.core.models import RegionSpec
from image_extractor.utils.image_utils import (
    compress_image,
    crop_to_region,
    decode_image,
    encode_lossless,
    normalize_image,
    rasterize_svg,
    resize_to_fit,
    resolve_region,
    round_half_up,
    to_png_mode
)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2
    assert round_half_up(-0.5) == 0


class TestResolveRegion:
    """Tests for resolve_region function on a 100x100 image."""

    @pytest.mark.parametrize("region,expected", [
        (RegionSpec.from_xyxy([10, 10, 60, 60]), (10, 10, 50, 50)),
        (RegionSpec.from_xyxy([0.1, 0.1, 0.6, 0.6]), (10, 10, 50, 50)),
        (RegionSpec.from_focal_point([50, 50, 20, 20]), (30, 30, 40, 40)),
        (RegionSpec.from_focal_point([0.5, 0.5, 0.2, 0.2]), (30, 30, 40, 40)),
    ])
    def test_pixel_and_ratio_regions(self, region, expected):
        assert resolve_region(region, 100, 100) == expected

    def test_ratio_scales_per_axis(self):
        region = RegionSpec.from_xyxy([0, 0, 0.5, 0.5])
        assert resolve_region(region, 200, 100) == (0, 0, 100, 50)

    def test_clamped_to_image(self):
        """Test overflowing rectangles are clipped to the image bounds."""
        region = RegionSpec.from_xyxy([80, 80, 150, 150])
        assert resolve_region(region, 100, 100) == (80, 80, 20, 20)

    def test_negative_origin_clamped(self):
        region = RegionSpec.from_focal_point([5, 5, 20, 20])
        assert resolve_region(region, 100, 100) == (0, 0, 40, 40)

    def test_empty_region(self):
        assert resolve_region(RegionSpec.from_xyxy([50, 50, 50, 80]), 100, 100) is None
        assert resolve_region(RegionSpec.from_xyxy([60, 10, 20, 40]), 100, 100) is None

    def test_region_outside_image(self):
        assert resolve_region(RegionSpec.from_xyxy([200, 200, 300, 300]), 100, 100) is None


class TestCropAndResize:
    """Tests for crop_to_region, resize_to_fit and normalize_image."""

    def test_crop_applied(self):
        img = Image.new('RGB', (100, 100))
        cropped, applied = crop_to_region(img, RegionSpec.from_xyxy([10, 10, 60, 60]))

        assert applied
        assert cropped.size == (50, 50)

    def test_crop_without_region(self):
        img = Image.new('RGB', (100, 100))
        result, applied = crop_to_region(img, None)

        assert result is img
        assert not applied

    def test_empty_crop_keeps_image(self):
        img = Image.new('RGB', (100, 100))
        result, applied = crop_to_region(img, RegionSpec.from_xyxy([50, 50, 50, 50]))

        assert result.size == (100, 100)
        assert not applied

    def test_resize_keeps_aspect(self):
        img = Image.new('RGB', (1000, 800))
        resized, changed = resize_to_fit(img, 512, 512)

        assert changed
        assert resized.size == (512, 410)
        assert img.size == (1000, 800)

    def test_resize_tall_image(self):
        resized, _ = resize_to_fit(Image.new('RGB', (300, 1000)), 512, 512)

        assert resized.height == 512
        assert resized.width <= 154

    def test_no_upscale(self):
        img = Image.new('RGB', (40, 30))
        result, changed = resize_to_fit(img, 512, 512)

        assert result.size == (40, 30)
        assert not changed

    def test_crop_happens_before_resize(self):
        """Test a pixel region refers to the source resolution."""
        img = Image.new('RGB', (2000, 2000))
        result, changed = normalize_image(img, RegionSpec.from_xyxy([0, 0, 1000, 500]), 512, 512)

        assert changed
        assert result.size == (512, 256)

    def test_normalize_unchanged(self):
        img = Image.new('RGB', (100, 100))
        result, changed = normalize_image(img, None, 512, 512)

        assert result.size == (100, 100)
        assert not changed


class TestDecodeImage:
    """Tests for decode_image function."""

    def test_decode_png(self, solid_png_bytes):
        img, fmt = decode_image(solid_png_bytes)

        assert img.size == (100, 100)
        assert fmt == 'png'

    @pytest.mark.parametrize("data", [b'', b'not an image', b'%PDF-1.4 fake'])
    def test_decode_failure(self, data):
        with pytest.raises(DecodeFailureError) as exc_info:
            decode_image(data)
        assert "Could not process image data" in str(exc_info.value)


class TestCompressImage:
    """Tests for compress_image and encode_lossless functions."""

    @pytest.mark.parametrize("fmt,pil_format", [
        ('jpeg', 'JPEG'),
        ('jpg', 'JPEG'),
        ('png', 'PNG'),
        ('webp', 'WEBP'),
        ('gif', 'GIF'),
        ('tiff', 'TIFF'),
    ])
    def test_formats(self, fmt, pil_format):
        img = Image.new('RGB', (64, 48), color='green')
        result = compress_image(img, fmt)

        encoded = Image.open(BytesIO(result.data))
        assert encoded.format == pil_format
        assert encoded.size == (64, 48)
        assert (result.width, result.height) == (64, 48)

    def test_jpg_reports_jpeg(self):
        assert compress_image(Image.new('RGB', (8, 8)), 'jpg').format == 'jpeg'

    def test_unknown_format_uses_jpeg(self):
        result = compress_image(Image.new('RGB', (8, 8)), 'bmp')

        assert result.format == 'jpeg'
        assert Image.open(BytesIO(result.data)).format == 'JPEG'

    def test_jpeg_drops_alpha(self):
        img = Image.new('RGBA', (20, 20), color=(255, 0, 0, 128))
        result = compress_image(img, 'jpeg')

        assert Image.open(BytesIO(result.data)).mode == 'RGB'

    def test_png_keeps_alpha(self):
        img = Image.new('RGBA', (20, 20), color=(255, 0, 0, 128))
        result = compress_image(img, 'png')

        assert Image.open(BytesIO(result.data)).mode == 'RGBA'

    def test_quality_affects_size(self):
        img = Image.effect_noise((256, 256), 64).convert('RGB')

        low = compress_image(img, 'jpeg', quality=20)
        high = compress_image(img, 'jpeg', quality=95)

        assert low.size < high.size

    def test_encode_lossless(self):
        img = Image.new('RGB', (30, 10))
        result = encode_lossless(img)

        assert result.format == 'png'
        assert Image.open(BytesIO(result.data)).format == 'PNG'


class TestPngModes:
    """Tests for to_png_mode and PNG encoding of non-RGB sources."""

    @pytest.mark.parametrize("mode,expected", [
        ('CMYK', 'RGB'),
        ('YCbCr', 'RGB'),
        ('RGB', 'RGB'),
        ('LA', 'LA'),
    ])
    def test_to_png_mode(self, mode, expected):
        assert to_png_mode(Image.new(mode, (4, 4))).mode == expected

    def test_cmyk_png(self):
        result = compress_image(Image.new('CMYK', (30, 20)), 'png')

        encoded = Image.open(BytesIO(result.data))
        assert encoded.format == 'PNG'
        assert encoded.mode == 'RGB'

    def test_cmyk_lossless(self):
        result = encode_lossless(Image.new('CMYK', (30, 20)))
        assert Image.open(BytesIO(result.data)).size == (30, 20)


class TestRasterizeSvg:
    """Tests for rasterize_svg function."""

    def test_intrinsic_size(self):
        svg = b'<svg xmlns="http://www.w3.org/2000/svg" width="40" height="25"><circle cx="10" cy="10" r="5"/></svg>'

        img = Image.open(BytesIO(rasterize_svg(svg)))

        assert img.format == 'PNG'
        assert img.size == (40, 25)

    def test_malformed_markup(self):
        with pytest.raises(DecodeFailureError):
            rasterize_svg(b'<svg xmlns="http://www.w3.org/2000/svg"><rect')
