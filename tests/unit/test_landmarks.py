"""
Unit tests for landmarks, escape bits and breakpoints.
"""

import pytest

from histogram_routing import ConfigurationError
from histogram_routing.landmarks import derive_landmarks
from histogram_routing.models import Vertex

# vertex: (left landmark, right landmark, escape bit)
SAMPLE_LANDMARKS = {
    0: (1, 15, True),
    1: (0, 9, True),
    2: (1, 4, True),
    3: (1, 4, True),
    4: (1, 8, True),
    5: (1, 8, True),
    6: (5, 8, False),
    7: (5, 8, False),
    8: (0, 9, True),
    9: (0, 13, True),
    10: (9, 12, True),
    11: (9, 12, True),
    12: (0, 13, True),
    13: (0, 15, True),
    14: (0, 15, True),
    15: (0, 14, True),
}

SAMPLE_BREAKPOINTS = {0: 9, 1: 8, 4: 3, 5: 6, 8: 5, 9: 12, 12: 11, 13: 14}


class TestLandmarks:
    """Tests for landmark/escape derivation."""

    @pytest.mark.parametrize("vertex_id", range(16))
    def test_sample_landmarks(self, prepared_sample, vertex_id):
        left, right, escape = SAMPLE_LANDMARKS[vertex_id]

        assert prepared_sample.left_landmark(vertex_id) == left
        assert prepared_sample.right_landmark(vertex_id) == right
        assert prepared_sample.escape_bit(vertex_id) is escape

    def test_landmarks_are_neighbors(self, prepared_sample):
        for v in range(len(prepared_sample)):
            group = prepared_sample.neighbors[v]
            assert prepared_sample.left_landmarks[v] == min(group)
            assert prepared_sample.right_landmarks[v] == max(group)

    def test_isolated_vertex_rejected(self):
        vertices = [Vertex(id=0, x=0, y=0), Vertex(id=1, x=1, y=0)]
        with pytest.raises(ConfigurationError, match="no visible neighbors"):
            derive_landmarks(vertices, [frozenset({1}), frozenset()])


class TestBreakpoints:
    """Tests for breakpoint derivation."""

    @pytest.mark.parametrize("vertex_id", range(16))
    def test_sample_breakpoints(self, prepared_sample, vertex_id):
        assert prepared_sample.breakpoint(vertex_id) == SAMPLE_BREAKPOINTS.get(vertex_id)

    def test_breakpoints_are_visible_tooth_endpoints(self, prepared_sample):
        for v, b in enumerate(prepared_sample.breakpoints):
            if b is None:
                continue
            assert b in prepared_sample.neighbors[v]
            assert prepared_sample.vertices[b].corresponding is not None
            assert prepared_sample.vertices[b].y > prepared_sample.vertices[v].y

    def test_rectangle(self, prepared_rectangle):
        assert prepared_rectangle.breakpoints == (3, 2, None, None)
