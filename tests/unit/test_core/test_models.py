"""
Unit tests for core.models module.
"""
import json

import pytest

from image_extractor.core.models import (
    FetchedPayload,
    PageSelector,
    RasterImage,
    RegionShape,
    RegionSpec,
    ResultArtifact
)


class TestRegionSpec:
    """Tests for RegionSpec dataclass."""

    def test_from_xyxy(self):
        region = RegionSpec.from_xyxy([10, 10, 60, 60])

        assert region.shape == RegionShape.XYXY
        assert region.values == (10.0, 10.0, 60.0, 60.0)
        assert not region.is_ratio

    def test_from_focal_point(self):
        region = RegionSpec.from_focal_point([0.5, 0.5, 0.2, 0.2])

        assert region.shape == RegionShape.CENTER
        assert region.is_ratio

    def test_ratio_boundaries(self):
        """Test 0 and 1 are both ratio values."""
        assert RegionSpec.from_xyxy([0, 0, 1, 1]).is_ratio
        assert not RegionSpec.from_xyxy([0, 0, 1.5, 1]).is_ratio
        assert not RegionSpec.from_xyxy([-0.1, 0, 1, 1]).is_ratio

    def test_wrong_length_raises(self):
        with pytest.raises(ValueError):
            RegionSpec.from_xyxy([1, 2, 3])

    def test_from_params_prefers_xyxy(self):
        region = RegionSpec.from_params([0, 0, 10, 10], [5, 5, 2, 2])
        assert region.shape == RegionShape.XYXY

    def test_from_params_focal_point_only(self):
        region = RegionSpec.from_params(None, [5, 5, 2, 2])
        assert region.shape == RegionShape.CENTER

    def test_from_params_ignores_malformed_lists(self):
        """Test lists that are not exactly four values are ignored."""
        assert RegionSpec.from_params([1, 2, 3], None) is None
        assert RegionSpec.from_params(None, [1, 2, 3, 4, 5]) is None
        assert RegionSpec.from_params([1, 2], [5, 5, 2, 2]).shape == RegionShape.CENTER
        assert RegionSpec.from_params() is None

    def test_frozen(self):
        region = RegionSpec.from_xyxy([0, 0, 1, 1])
        with pytest.raises(Exception):
            region.values = (1, 1, 1, 1)

    @pytest.mark.parametrize("bad", [float('nan'), float('inf'), float('-inf')])
    def test_from_params_ignores_non_finite_values(self, bad):
        assert RegionSpec.from_params([bad, 0, 50, 50], None) is None
        assert RegionSpec.from_params([bad, 0, 50, 50], [5, 5, 2, 2]).shape == RegionShape.CENTER


class TestPayloads:
    """Tests for FetchedPayload, PageSelector and RasterImage."""

    def test_fetched_payload_size(self):
        payload = FetchedPayload(data=b'abcd', reference='x.png')

        assert payload.size == 4
        assert payload.declared_mime_type is None
        assert payload.extension is None

    def test_page_selector_defaults(self):
        selector = PageSelector()

        assert selector.page == 1
        assert selector.dpi == 150

    def test_page_selector_rejects_bad_dpi(self):
        with pytest.raises(ValueError):
            PageSelector(page=1, dpi=0)

    def test_raster_image_size(self):
        assert RasterImage(data=b'123', width=1, height=1, format='png').size == 3


class TestResultArtifact:
    """Tests for ResultArtifact."""

    def test_success(self):
        metadata = {'width': 10, 'height': 5, 'format': 'png', 'size': 42}
        result = ResultArtifact.success(metadata, 'aGVsbG8=', 'image/png')

        assert not result.is_error
        assert len(result.content) == 2
        assert result.content[0]['type'] == 'text'
        assert json.loads(result.content[0]['text']) == metadata
        assert result.content[1] == {'type': 'image', 'data': 'aGVsbG8=', 'mimeType': 'image/png'}
        assert result.metadata == metadata

    def test_error(self):
        result = ResultArtifact.error("Error: boom")

        assert result.is_error
        assert result.content == [{'type': 'text', 'text': 'Error: boom'}]
        assert result.text == "Error: boom"

    def test_to_dict(self):
        success = ResultArtifact.success({}, 'x', 'image/png').to_dict()
        error = ResultArtifact.error("Error: boom").to_dict()

        assert 'isError' not in success
        assert len(success['content']) == 2
        assert error['isError'] is True
