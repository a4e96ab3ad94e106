"""Unit tests for the DXF parser."""

import pytest

from conftest import build_dxf, dxf_circle, dxf_line

from beadstudio.domain import Arc, Circle, Ellipse, Line, Point, PointEntity, Polyline, Spline
from beadstudio.exceptions import (
    DegenerateGeometryError,
    EmptyDocumentError,
    MalformedDocumentError,
)
from beadstudio.io.dxf import DxfParser, entities_section, read_group_pairs, split_entities
from beadstudio.io.reader import decode_text


class TestGroupPairs:
    """Tests for the group-code stream reader."""

    def test_pairs(self):
        """Test codes and values are paired and stripped."""
        pairs = read_group_pairs("  0\nSECTION\n  2\nENTITIES\n")
        assert pairs == [(0, "SECTION"), (2, "ENTITIES")]

    def test_trailing_blank_lines(self):
        """Test blank lines at the end are ignored."""
        assert read_group_pairs("0\nEOF\n\n\n") == [(0, "EOF")]

    def test_crlf_line_endings(self):
        """Test Windows line endings."""
        assert read_group_pairs("0\r\nEOF\r\n") == [(0, "EOF")]

    def test_control_characters_inside_values(self):
        """Test only newlines split lines, not NEL or form feed."""
        pairs = read_group_pairs("1\nNote\x85 one\x0ctwo\n8\nLayer\x1cA\n")
        assert pairs == [(1, "Note\x85 one\x0ctwo"), (8, "Layer\x1cA")]

    def test_odd_line_count(self):
        """Test a code without a value is malformed."""
        with pytest.raises(MalformedDocumentError, match="no value"):
            read_group_pairs("0\nSECTION\n2\n")

    def test_non_integer_code(self):
        """Test a non-numeric group code is malformed."""
        with pytest.raises(MalformedDocumentError, match="invalid group code"):
            read_group_pairs("zero\nSECTION\n")

    def test_entities_section(self):
        """Test extraction of the ENTITIES body."""
        pairs = read_group_pairs(build_dxf(dxf_line(0, 0, 1, 1)))
        body = entities_section(pairs)
        assert body[0] == (0, "LINE")
        assert (0, "ENDSEC") not in body

    def test_missing_entities_section(self):
        """Test a stream without ENTITIES."""
        assert entities_section([(0, "SECTION"), (2, "HEADER"), (0, "ENDSEC")]) is None

    def test_split_entities(self):
        """Test records split on 0 markers, type names upper-cased."""
        records = split_entities([(0, "line"), (10, "1"), (0, "CIRCLE"), (40, "2")])
        assert [r.entity_type for r in records] == ["LINE", "CIRCLE"]
        assert records[0].value(10) == 1.0
        assert records[1].value(40) == 2.0


class TestDxfEntities:
    """Tests for per-entity parsing."""

    def test_line(self):
        """Test LINE endpoints from 10/20 and 11/21."""
        document = DxfParser().parse(build_dxf(dxf_line(1, 2, 3, 4)))
        assert document.primitives == (Line(Point(1, 2), Point(3, 4)),)

    def test_circle(self):
        """Test CIRCLE center and radius."""
        document = DxfParser().parse(build_dxf(dxf_circle(50, 50, 20)))
        assert document.primitives == (Circle(Point(50, 50), 20),)
        assert (document.width, document.height) == (40.0, 40.0)

    def test_arc(self):
        """Test ARC angles from 50/51."""
        entity = [(0, "ARC"), (10, 0), (20, 0), (40, 5), (50, 0), (51, 90)]
        (arc,) = DxfParser().parse(build_dxf(entity)).primitives
        assert arc == Arc(Point(0, 0), 5.0, 0.0, 90.0)

    def test_lwpolyline_closed(self):
        """Test LWPOLYLINE vertex run and closed flag."""
        entity = [
            (0, "LWPOLYLINE"), (90, 4), (70, 1),
            (10, 0), (20, 0), (10, 10), (20, 0), (10, 10), (20, 10), (10, 0), (20, 10),
        ]
        (polyline,) = DxfParser().parse(build_dxf(entity)).primitives
        assert isinstance(polyline, Polyline)
        assert polyline.closed
        assert [p.to_tuple() for p in polyline.vertices] == [(0, 0), (10, 0), (10, 10), (0, 10)]

    def test_lwpolyline_open(self):
        """Test an LWPOLYLINE without the closed bit."""
        entity = [(0, "LWPOLYLINE"), (70, 128), (10, 0), (20, 0), (10, 5), (20, 5)]
        (polyline,) = DxfParser().parse(build_dxf(entity)).primitives
        assert not polyline.closed

    def test_legacy_polyline(self):
        """Test POLYLINE with VERTEX records and SEQEND."""
        entities = [
            [(0, "POLYLINE"), (66, 1), (10, 0), (20, 0), (70, 1)],
            [(0, "VERTEX"), (10, 1), (20, 1)],
            [(0, "VERTEX"), (10, 5), (20, 1)],
            [(0, "VERTEX"), (10, 5), (20, 5)],
            [(0, "SEQEND")],
            dxf_line(1, 1, 9, 9),
        ]
        document = DxfParser().parse(build_dxf(*entities))
        polyline, line = document.primitives
        assert polyline.closed
        assert [p.to_tuple() for p in polyline.vertices] == [(1, 1), (5, 1), (5, 5)]
        assert isinstance(line, Line)
        assert document.skipped == 0

    def test_legacy_polyline_header_point_ignored(self):
        """Test the header placeholder point does not widen the extent."""
        entities = [
            [(0, "POLYLINE"), (10, -100), (20, -100)],
            [(0, "VERTEX"), (10, 1), (20, 1)],
            [(0, "VERTEX"), (10, 5), (20, 4)],
            [(0, "SEQEND")],
        ]
        document = DxfParser().parse(build_dxf(*entities))
        assert (document.bbox.min_x, document.bbox.min_y) == (1.0, 1.0)

    def test_ellipse(self):
        """Test ELLIPSE axes from the major-axis endpoint and ratio."""
        entity = [(0, "ELLIPSE"), (10, 5), (20, 5), (11, 0), (21, 4), (40, 0.5)]
        (ellipse,) = DxfParser().parse(build_dxf(entity)).primitives
        assert isinstance(ellipse, Ellipse)
        assert ellipse.semi_major == pytest.approx(4.0)
        assert ellipse.semi_minor == pytest.approx(2.0)
        assert ellipse.rotation == pytest.approx(90.0)

    def test_spline_control_points(self):
        """Test SPLINE control points."""
        entity = [(0, "SPLINE"), (70, 1), (10, 0), (20, 0), (10, 5), (20, 5), (10, 10), (20, 0)]
        (spline,) = DxfParser().parse(build_dxf(entity)).primitives
        assert isinstance(spline, Spline)
        assert spline.closed
        assert len(spline.control_points) == 3

    def test_spline_fit_points_fallback(self):
        """Test SPLINE without control points uses fit points."""
        entity = [(0, "SPLINE"), (11, 0), (21, 0), (11, 5), (21, 5), (11, 10), (21, 0)]
        (spline,) = DxfParser().parse(build_dxf(entity)).primitives
        assert spline.control_points[1] == Point(5, 5)

    def test_point_widens_extent(self):
        """Test POINT entities count toward the bounding box."""
        entities = [dxf_circle(5, 5, 1), [(0, "POINT"), (10, 20), (20, 20)]]
        document = DxfParser().parse(build_dxf(*entities))
        assert isinstance(document.primitives[1], PointEntity)
        assert (document.bbox.max_x, document.bbox.max_y) == (20.0, 20.0)


class TestDxfParser:
    """Tests for document-level DXF behavior."""

    def test_unsupported_entities_skipped(self):
        """Test TEXT, INSERT and HATCH are counted, not fatal."""
        entities = [
            [(0, "TEXT"), (10, 0), (20, 0), (1, "label")],
            [(0, "INSERT"), (2, "BLOCK1")],
            dxf_circle(0, 0, 1),
            [(0, "HATCH")],
        ]
        document = DxfParser().parse(build_dxf(*entities))
        assert len(document.primitives) == 1
        assert document.skipped == 3

    def test_invalid_fields_skipped(self):
        """Test entities with missing or non-numeric fields are skipped."""
        entities = [
            [(0, "CIRCLE"), (10, 0), (20, 0)],
            [(0, "LINE"), (10, "abc"), (20, 0), (11, 1), (21, 1)],
            dxf_line(0, 0, 4, 3),
        ]
        document = DxfParser().parse(build_dxf(*entities))
        assert len(document.primitives) == 1
        assert document.skipped == 2
        assert (document.width, document.height) == (4.0, 3.0)

    def test_lowercase_entity_names(self):
        """Test entity markers are case-insensitive."""
        document = DxfParser().parse(build_dxf([(0, "circle"), (10, 0), (20, 0), (40, 2)]))
        assert isinstance(document.primitives[0], Circle)

    def test_no_entities_section(self):
        """Test a file without ENTITIES is empty."""
        with pytest.raises(EmptyDocumentError, match="ENTITIES"):
            DxfParser().parse(build_dxf(with_entities_section=False))

    def test_no_valid_entities(self):
        """Test a file with only unsupported or broken entities is empty."""
        with pytest.raises(EmptyDocumentError, match="no valid graphic entities"):
            DxfParser().parse(build_dxf([(0, "TEXT"), (1, "x")], [(0, "CIRCLE"), (40, 1)]))

    def test_flat_extent_is_degenerate(self):
        """Test a single horizontal line has no area."""
        with pytest.raises(DegenerateGeometryError):
            DxfParser().parse(build_dxf(dxf_line(0, 0, 10, 0)))

    def test_malformed_stream(self):
        """Test a broken group-code stream."""
        with pytest.raises(MalformedDocumentError):
            DxfParser().parse("0\nSECTION\n2\n")

    def test_fixture_circle(self, fixtures_dir):
        """Test the circle fixture with a HEADER section."""
        text = (fixtures_dir / "circle.dxf").read_text()
        document = DxfParser().parse(text)
        assert document.count_by_kind() == {"circle": 1}
        assert (document.width, document.height) == (40.0, 40.0)

    def test_legacy_text_with_ellipsis(self):
        """Test a Latin-1 decoded cp1252 ellipsis in a TEXT value keeps pairs aligned."""
        text = build_dxf(
            dxf_circle(5, 5, 5),
            [(0, "TEXT"), (8, "Notes"), (10, 0), (20, 0), (1, "See detail\x85 page\x0c2")],
        )
        document = DxfParser().parse(decode_text(text.encode("latin-1")))
        assert document.count_by_kind() == {"circle": 1}
        assert document.skipped == 1
