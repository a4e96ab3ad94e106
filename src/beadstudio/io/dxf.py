"""DXF parser producing documents.

ASCII DXF is a flat stream of ``(group code, value)`` line pairs. Only the
``ENTITIES`` section is read, and only these entity types are drawn:
``LINE``, ``CIRCLE``, ``ARC``, ``POLYLINE`` (with ``VERTEX``/``SEQEND``),
``LWPOLYLINE``, ``ELLIPSE``, ``SPLINE`` and ``POINT``. Anything else
(text, hatches, block inserts, dimensions) is skipped and counted.

Entities with missing or non-finite fields are skipped too, so one broken
entity never turns the document extent into NaN.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from beadstudio.domain import (
    Arc,
    BoundingBox,
    Circle,
    Document,
    Ellipse,
    Line,
    Point,
    PointEntity,
    Polyline,
    Primitive,
    SourceFormat,
    Spline,
)
from beadstudio.exceptions import EmptyDocumentError, MalformedDocumentError

logger = structlog.get_logger(__name__)

GroupPair = tuple[int, str]

CLOSED_FLAG = 1


@dataclass
class EntityRecord:
    """One entity: its type name and the group pairs that follow it."""

    entity_type: str
    pairs: list[GroupPair] = field(default_factory=list)

    def value(self, code: int) -> float:
        """First value for a group code as a float, NaN if absent or unparseable."""
        for pair_code, raw in self.pairs:
            if pair_code == code:
                return _to_float(raw)
        return math.nan

    def flags(self, code: int = 70) -> int:
        for pair_code, raw in self.pairs:
            if pair_code == code:
                try:
                    return int(float(raw))
                except ValueError:
                    return 0
        return 0


def _to_float(raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        return math.nan


def read_group_pairs(text: str) -> list[GroupPair]:
    """Split DXF text into ``(group code, value)`` pairs.

    Raises:
        MalformedDocumentError: If a group code is not an integer or a code has no value
    """
    # Only \n ends a line; values may hold other control characters
    lines = [line.strip() for line in text.split("\n")]
    while lines and not lines[-1]:
        lines.pop()

    if len(lines) % 2:
        raise MalformedDocumentError("dxf", f"group code on line {len(lines)} has no value")

    pairs: list[GroupPair] = []
    for index in range(0, len(lines), 2):
        try:
            code = int(lines[index])
        except ValueError as e:
            raise MalformedDocumentError(
                "dxf", f"invalid group code {lines[index]!r} on line {index + 1}"
            ) from e
        pairs.append((code, lines[index + 1]))
    return pairs


def entities_section(pairs: list[GroupPair]) -> list[GroupPair] | None:
    """Pairs between ``0/SECTION 2/ENTITIES`` and the matching ``0/ENDSEC``.

    Returns:
        The section body, or None if the stream has no ENTITIES section
    """
    for index in range(len(pairs) - 1):
        if pairs[index] == (0, "SECTION") and pairs[index + 1] == (2, "ENTITIES"):
            body: list[GroupPair] = []
            for pair in pairs[index + 2 :]:
                if pair == (0, "ENDSEC"):
                    break
                body.append(pair)
            return body
    return None


def split_entities(body: list[GroupPair]) -> list[EntityRecord]:
    """Group section pairs into records, one per ``0/<TYPE>`` marker."""
    records: list[EntityRecord] = []
    for code, value in body:
        if code == 0:
            records.append(EntityRecord(entity_type=value.upper()))
        elif records:
            records[-1].pairs.append((code, value))
    return records


def _vertex_run(record: EntityRecord, x_code: int = 10, y_code: int = 20) -> list[Point]:
    """Vertices stored as repeated x/y pairs with no per-vertex marker.

    Each x code starts a new vertex; the following y code completes it.
    """
    vertices: list[Point] = []
    pending_x: float | None = None
    for code, raw in record.pairs:
        if code == x_code:
            pending_x = _to_float(raw)
        elif code == y_code and pending_x is not None:
            vertices.append(Point(pending_x, _to_float(raw)))
            pending_x = None
    return vertices


def _parse_line(record: EntityRecord) -> Primitive:
    return Line(
        p1=Point(record.value(10), record.value(20)),
        p2=Point(record.value(11), record.value(21)),
    )


def _parse_circle(record: EntityRecord) -> Primitive:
    return Circle(center=Point(record.value(10), record.value(20)), radius=record.value(40))


def _parse_arc(record: EntityRecord) -> Primitive:
    return Arc(
        center=Point(record.value(10), record.value(20)),
        radius=record.value(40),
        start_angle=record.value(50),
        end_angle=record.value(51),
    )


def _parse_lwpolyline(record: EntityRecord) -> Primitive:
    return Polyline(
        vertices=tuple(_vertex_run(record)),
        closed=bool(record.flags() & CLOSED_FLAG),
    )


def _parse_ellipse(record: EntityRecord) -> Primitive:
    # 11/21 is the major axis endpoint relative to the center, 40 the minor/major ratio
    axis_x = record.value(11)
    axis_y = record.value(21)
    semi_major = math.hypot(axis_x, axis_y)
    return Ellipse(
        center=Point(record.value(10), record.value(20)),
        semi_major=semi_major,
        semi_minor=semi_major * record.value(40),
        rotation=math.degrees(math.atan2(axis_y, axis_x)),
    )


def _parse_spline(record: EntityRecord) -> Primitive:
    points = _vertex_run(record)
    if not points:
        points = _vertex_run(record, x_code=11, y_code=21)
    return Spline(control_points=tuple(points), closed=bool(record.flags() & CLOSED_FLAG))


def _parse_point(record: EntityRecord) -> Primitive:
    return PointEntity(location=Point(record.value(10), record.value(20)))


_ENTITY_PARSERS: dict[str, Callable[[EntityRecord], Primitive]] = {
    "LINE": _parse_line,
    "CIRCLE": _parse_circle,
    "ARC": _parse_arc,
    "LWPOLYLINE": _parse_lwpolyline,
    "ELLIPSE": _parse_ellipse,
    "SPLINE": _parse_spline,
    "POINT": _parse_point,
}


class DxfParser:
    """Parses ASCII DXF text into a :class:`Document`.

    Example:
        document = DxfParser().parse(dxf_text)
    """

    def parse(self, text: str) -> Document:
        """Parse a DXF group-code stream.

        Args:
            text: DXF file contents

        Returns:
            Document with the valid entities and their combined extent

        Raises:
            MalformedDocumentError: If the group-code stream is broken
            EmptyDocumentError: If no valid entity remains
            DegenerateGeometryError: If the entities span no area
        """
        pairs = read_group_pairs(text)
        body = entities_section(pairs)
        if body is None:
            raise EmptyDocumentError("dxf", "no ENTITIES section")

        records = split_entities(body)
        primitives: list[Primitive] = []
        skipped = 0

        index = 0
        while index < len(records):
            record = records[index]
            index += 1

            if record.entity_type == "POLYLINE":
                primitive, consumed = self._parse_polyline(record, records[index:])
                index += consumed
            elif record.entity_type in _ENTITY_PARSERS:
                primitive = _ENTITY_PARSERS[record.entity_type](record)
            else:
                logger.debug("Skipping unsupported DXF entity", entity=record.entity_type)
                skipped += 1
                continue

            if primitive.bounds() is None:
                logger.debug("Skipping DXF entity with invalid fields", entity=record.entity_type)
                skipped += 1
                continue

            primitives.append(primitive)

        if not primitives:
            raise EmptyDocumentError("dxf", "no valid graphic entities")

        bbox = BoundingBox.union(p.bounds() for p in primitives)

        return Document(
            primitives=tuple(primitives),
            bbox=bbox,
            source_format=SourceFormat.DXF,
            skipped=skipped,
        )

    @staticmethod
    def _parse_polyline(
        header: EntityRecord, following: list[EntityRecord]
    ) -> tuple[Primitive, int]:
        """Legacy POLYLINE: a header, VERTEX sub-entities, then SEQEND.

        The header's own 10/20 pair is a placeholder and is ignored, as are
        the per-vertex 70 flags; only the header's flag closes the shape.

        Returns:
            The polyline and the number of following records consumed
        """
        vertices: list[Point] = []
        consumed = 0
        for record in following:
            if record.entity_type == "VERTEX":
                vertices.append(Point(record.value(10), record.value(20)))
                consumed += 1
            elif record.entity_type == "SEQEND":
                consumed += 1
                break
            else:
                break

        closed = bool(header.flags() & CLOSED_FLAG)
        return Polyline(vertices=tuple(vertices), closed=closed), consumed
