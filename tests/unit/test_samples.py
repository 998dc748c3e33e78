"""
Unit tests for sample polygons and JSON loading.
"""

import json

import pytest

from histogram_routing import ConfigurationError, SAMPLE_HISTOGRAM, load_polygon, polygon_from_payload


class TestPayloads:
    """Tests for polygon_from_payload."""

    def test_bare_list(self):
        assert polygon_from_payload([[0, 0], [10, 0], [10, 5], [0, 5]])[2] == (10.0, 5.0)

    def test_vertices_object(self):
        payload = {"vertices": [{"x": 0, "y": 0}, {"x": 10, "y": 0}]}
        assert polygon_from_payload(payload) == [(0.0, 0.0), (10.0, 0.0)]

    def test_polygon_key(self):
        assert polygon_from_payload({"polygon": [[1, 2]]}) == [(1.0, 2.0)]

    def test_missing_key(self):
        with pytest.raises(ConfigurationError, match="vertices"):
            polygon_from_payload({"points": []})

    def test_not_a_list(self):
        with pytest.raises(ConfigurationError):
            polygon_from_payload("0,0 10,0")


class TestLoadPolygon:
    """Tests for load_polygon."""

    def test_round_trip_through_file(self, polygon_file):
        assert load_polygon(polygon_file) == [(float(x), float(y)) for x, y in SAMPLE_HISTOGRAM]

    def test_bad_file_content(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"vertices": [[0, 0], ["a", "b"]]}))

        with pytest.raises(ConfigurationError):
            load_polygon(path)

    def test_truncated_json(self, tmp_path):
        path = tmp_path / "truncated.json"
        path.write_text('{"vertices": [[0,0],[10,0]')

        with pytest.raises(ConfigurationError, match="not valid JSON"):
            load_polygon(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_polygon(tmp_path / "nowhere.json")


class TestSampleHistogram:
    """The built-in sample itself."""

    def test_shape(self, prepared_sample):
        assert len(SAMPLE_HISTOGRAM) == 16
        assert (prepared_sample.base.left, prepared_sample.base.right) == (0, 1)

    def test_describe(self, prepared_sample):
        table = prepared_sample.describe()

        assert len(table["vertices"]) == 16
        assert table["vertices"][0]["neighbors"] == [1, 8, 9, 12, 13, 14, 15]
        assert table["vertices"][6]["escape_bit"] is False
        assert table["base"] == {"left": 0, "right": 1, "y": 50.0}
