"""
Unit tests for utils.content_utils module.
"""
import pytest

from image_extractor.core.models import ContentKind
from image_extractor.utils.content_utils import (
    classify_content,
    format_from_mime_type,
    get_extension,
    get_mime_and_format,
    is_pdf_bytes,
    is_svg,
    mime_type_for_format
)

PNG_HEADER = b'\x89PNG\r\n\x1a\n' + b'\x00' * 16


class TestClassifyContent:
    """Tests for classify_content function."""

    def test_magic_bytes(self):
        """Test %PDF- wins over any hint."""
        assert classify_content(b'%PDF-1.7 ...', extension='.png', declared_mime_type='image/png') == ContentKind.DOCUMENT

    def test_image_without_hints(self):
        assert classify_content(PNG_HEADER) == ContentKind.IMAGE

    def test_pdf_mime_hint(self):
        assert classify_content(PNG_HEADER, declared_mime_type='application/pdf') == ContentKind.DOCUMENT
        assert classify_content(PNG_HEADER, declared_mime_type='application/x-pdf') == ContentKind.DOCUMENT

    def test_pdf_extension_hint(self):
        assert classify_content(PNG_HEADER, extension='.pdf') == ContentKind.DOCUMENT

    def test_pdf_url_suffix_hint(self):
        assert classify_content(PNG_HEADER, url_suffix='.PDF') == ContentKind.DOCUMENT

    def test_magic_policy_ignores_hints(self):
        """Test the 'magic' policy trusts magic bytes only."""
        result = classify_content(
            PNG_HEADER,
            extension='.pdf',
            declared_mime_type='application/pdf',
            policy='magic'
        )
        assert result == ContentKind.IMAGE
        assert classify_content(b'%PDF-1.4', policy='magic') == ContentKind.DOCUMENT

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            classify_content(PNG_HEADER, policy='guess')

    def test_short_payload(self):
        assert not is_pdf_bytes(b'%PD')
        assert classify_content(b'') == ContentKind.IMAGE


class TestFormatHelpers:
    """Tests for extension and format mapping."""

    @pytest.mark.parametrize("ext,expected", [
        ('.png', ('image/png', 'png')),
        ('.jpg', ('image/jpeg', 'jpeg')),
        ('.JPEG', ('image/jpeg', 'jpeg')),
        ('.gif', ('image/gif', 'gif')),
        ('.webp', ('image/webp', 'webp')),
        ('.svg', ('image/png', 'png')),
        ('.avif', ('image/avif', 'avif')),
        ('.bmp', ('image/jpeg', 'jpeg')),
        ('', ('image/jpeg', 'jpeg')),
    ])
    def test_get_mime_and_format(self, ext, expected):
        assert get_mime_and_format(ext) == expected

    def test_get_extension(self):
        assert get_extension('/tmp/scan.PNG') == '.png'
        assert get_extension('https://example.com/files/report.PDF?download=1') == '.pdf'
        assert get_extension('https://example.com/') == ''

    def test_format_from_mime_type(self):
        assert format_from_mime_type('image/webp') == 'webp'
        assert format_from_mime_type('image/png; charset=binary') == 'png'
        assert format_from_mime_type(None) == 'jpeg'
        assert format_from_mime_type('garbage') == 'jpeg'

    def test_mime_type_for_format(self):
        assert mime_type_for_format('png') == 'image/png'
        assert mime_type_for_format('JPEG') == 'image/jpeg'
        assert mime_type_for_format('unknown') == 'image/jpeg'


class TestIsSvg:
    """Tests for is_svg function."""

    @pytest.mark.parametrize("data", [
        b'<svg xmlns="http://www.w3.org/2000/svg"/>',
        b'<?xml version="1.0"?>\n<svg></svg>',
        b'\xef\xbb\xbf  <!-- icon --><SVG></SVG>',
    ])
    def test_markup(self, data):
        assert is_svg(data)

    def test_mime_type(self):
        assert is_svg(b'', declared_mime_type='image/SVG+xml')

    @pytest.mark.parametrize("data", [PNG_HEADER, b'<html><body></body></html>', b'%PDF-1.4', b''])
    def test_not_svg(self, data):
        assert not is_svg(data, declared_mime_type='image/png')
