"""Unit tests for the workspace/document transform."""

import pytest

from beadstudio.core.transform import WorkspaceTransform
from beadstudio.domain import Contour, Point


class TestWorkspaceTransform:
    """Tests for WorkspaceTransform."""

    def test_identity(self):
        """Test the identity leaves coordinates alone."""
        transform = WorkspaceTransform.identity()
        assert transform.to_document(0.3, 0.7) == (0.3, 0.7)
        assert transform.to_workspace(0.3, 0.7) == (0.3, 0.7)

    def test_centered_smaller_drawing(self):
        """Test a drawing half the workspace size sits in the middle."""
        transform = WorkspaceTransform.centered(50.0, 100.0, 100.0, 100.0)
        assert transform.scale_x == 0.5
        assert transform.scale_y == 1.0
        assert transform.offset_x == 0.25
        assert transform.offset_y == 0.0
        assert transform.to_document(0.25, 0.0) == (0.0, 0.0)
        assert transform.to_document(0.75, 1.0) == (1.0, 1.0)

    def test_centered_larger_drawing(self):
        """Test a drawing larger than the workspace overhangs on both sides."""
        transform = WorkspaceTransform.centered(200.0, 200.0, 100.0, 100.0)
        assert transform.offset_x == -0.5
        assert transform.to_document(0.5, 0.5) == (0.5, 0.5)
        assert transform.to_document(0.0, 0.0) == (0.25, 0.25)

    def test_missing_size_is_identity(self):
        """Test zero sizes fall back to the identity."""
        assert WorkspaceTransform.centered(0.0, 10.0, 100.0, 100.0) == WorkspaceTransform.identity()
        assert WorkspaceTransform.centered(10.0, 10.0, 0.0, 100.0) == WorkspaceTransform.identity()

    @pytest.mark.parametrize(
        "sizes",
        [(40.0, 40.0, 150.0, 150.0), (300.0, 120.0, 150.0, 100.0), (7.5, 3.0, 10.0, 10.0)],
    )
    def test_round_trip(self, sizes):
        """Test document -> workspace -> document reproduces the contour."""
        transform = WorkspaceTransform.centered(*sizes)
        contour = Contour(points=(Point(0.0, 0.0), Point(1.0, 0.2), Point(0.4, 1.0)))
        for original, projected in zip(contour.points, transform.project_contour(contour)):
            back = transform.to_document(projected.x, projected.y)
            assert back == pytest.approx(original.to_tuple())

    def test_project_contour(self):
        """Test outline projection into workspace space."""
        transform = WorkspaceTransform.centered(50.0, 50.0, 100.0, 100.0)
        contour = Contour(points=(Point(0.0, 0.0), Point(1.0, 0.0), Point(1.0, 1.0)))
        projected = transform.project_contour(contour)
        assert [p.to_tuple() for p in projected] == [(0.25, 0.25), (0.75, 0.25), (0.75, 0.75)]
