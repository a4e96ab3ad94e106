"""SVG parser producing documents.

Supports a practical subset of SVG: ``path``, ``circle``, ``rect``,
``ellipse``, ``polygon``, ``polyline`` and ``line`` elements, sized by the
root ``viewBox`` or, failing that, its ``width``/``height`` attributes.
Transforms, styles and nesting semantics are ignored; every supported
element is drawn in root coordinates, except inside definition-only
containers such as ``defs`` and ``clipPath``, which are never walked.

Path data is flattened while parsing: Bezier segments are sampled at a
fixed step count and elliptical arcs (``A``/``a``) are approximated by
the straight line between their endpoints.
"""

import math
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterator

import structlog

from beadstudio.config import TessellationConfig
from beadstudio.core.tessellation import (
    DEFAULT_BEZIER_STEPS,
    interpolate_line,
    tessellate_cubic_bezier,
    tessellate_quadratic_bezier,
)
from beadstudio.domain import (
    BoundingBox,
    Circle,
    Document,
    Ellipse,
    Line,
    Point,
    Polyline,
    Primitive,
    SourceFormat,
)
from beadstudio.exceptions import EmptyDocumentError, MalformedDocumentError

logger = structlog.get_logger(__name__)

DEFAULT_DOCUMENT_SIZE = 100.0

_COMMAND_RE = re.compile(r"[MmLlHhVvCcSsQqTtAaZz][^MmLlHhVvCcSsQqTtAaZz]*")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_NON_NUMERIC_RE = re.compile(r"[^\d.]")

# Elements that only group or describe content
_STRUCTURAL_TAGS = frozenset({"svg", "g", "title", "desc", "metadata", "style"})

# Containers whose content is only drawn when referenced; never walked
_NON_RENDERED_TAGS = frozenset({"defs", "clipPath", "mask", "symbol", "marker", "pattern"})


def _local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def _numbers(text: str) -> list[float]:
    return [float(token) for token in _NUMBER_RE.findall(text)]


def _float_attr(element: ET.Element, name: str, default: float = 0.0) -> float:
    """Leading number of an attribute such as ``"12.5px"``, or ``default``."""
    match = _NUMBER_RE.search(element.get(name, ""))
    return float(match.group(0)) if match else default


def _dimension(value: str | None) -> float:
    """Width/height attribute with units stripped, defaulting to 100."""
    if not value:
        return DEFAULT_DOCUMENT_SIZE
    try:
        parsed = float(_NON_NUMERIC_RE.sub("", value))
    except ValueError:
        return DEFAULT_DOCUMENT_SIZE
    return parsed if math.isfinite(parsed) else DEFAULT_DOCUMENT_SIZE


def iter_rendered(element: ET.Element) -> Iterator[tuple[str, ET.Element]]:
    """Descendants drawn in place, as ``(local tag, element)`` in document order.

    Subtrees of definition-only containers (``defs``, ``clipPath``, ...) are
    left out entirely.
    """
    for child in element:
        if not isinstance(child.tag, str):
            continue
        tag = _local_name(child.tag)
        if tag in _NON_RENDERED_TAGS:
            continue
        yield tag, child
        yield from iter_rendered(child)


def document_bbox(root: ET.Element) -> BoundingBox:
    """Document extent from ``viewBox``, else ``width``/``height``.

    Raises:
        DegenerateGeometryError: If the resulting box has no area
    """
    view_box = root.get("viewBox")
    if view_box:
        values = _numbers(view_box)
        if len(values) >= 4:
            min_x, min_y, width, height = values[:4]
            return BoundingBox(min_x, min_y, min_x + width, min_y + height)
        logger.debug("Ignoring unparseable viewBox", view_box=view_box)

    width = _dimension(root.get("width"))
    height = _dimension(root.get("height"))
    return BoundingBox(0.0, 0.0, width, height)


class PathBuilder:
    """Turns SVG path data into one polyline per subpath.

    Tracks the current point, the subpath start (for ``Z``) and the last
    control point (for the ``S``/``T`` reflection rule).
    """

    def __init__(self, bezier_steps: int = DEFAULT_BEZIER_STEPS) -> None:
        self.bezier_steps = bezier_steps
        self.current = Point(0.0, 0.0)
        self.start = Point(0.0, 0.0)
        self.last_control = Point(0.0, 0.0)
        self.last_command = ""
        self._subpath: list[Point] = []
        self._closed = False
        self.polylines: list[Polyline] = []

    def build(self, d: str) -> list[Polyline]:
        """Parse a complete ``d`` attribute.

        Returns:
            One polyline per subpath with at least two points
        """
        for chunk in _COMMAND_RE.findall(d):
            command = chunk[0]
            self._apply(command, _numbers(chunk[1:]))
            self.last_command = command
        self._finish_subpath()
        return self.polylines

    def _resolve(self, relative: bool, x: float, y: float) -> Point:
        if relative:
            return Point(self.current.x + x, self.current.y + y)
        return Point(x, y)

    def _emit(self, point: Point) -> None:
        if not self._subpath:
            # Drawing after Z continues from the previous subpath start
            self._subpath.append(self.current)
        self._subpath.append(point)

    def _finish_subpath(self) -> None:
        if len(self._subpath) >= 2:
            self.polylines.append(Polyline(vertices=tuple(self._subpath), closed=self._closed))
        self._subpath = []
        self._closed = False

    def _apply(self, command: str, args: list[float]) -> None:
        upper = command.upper()
        relative = command.islower()

        if upper == "M":
            if len(args) < 2:
                return
            self._finish_subpath()
            self.current = self._resolve(relative, args[0], args[1])
            self.start = self.current
            self._subpath = [self.current]
            # Extra coordinate pairs after a moveto are implicit linetos
            for i in range(2, len(args) - 1, 2):
                self.current = self._resolve(relative, args[i], args[i + 1])
                self._emit(self.current)

        elif upper == "L":
            for i in range(0, len(args) - 1, 2):
                self.current = self._resolve(relative, args[i], args[i + 1])
                self._emit(self.current)

        elif upper == "H":
            for value in args:
                x = self.current.x + value if relative else value
                self.current = Point(x, self.current.y)
                self._emit(self.current)

        elif upper == "V":
            for value in args:
                y = self.current.y + value if relative else value
                self.current = Point(self.current.x, y)
                self._emit(self.current)

        elif upper == "C":
            for i in range(0, len(args) - 5, 6):
                c1 = self._resolve(relative, args[i], args[i + 1])
                c2 = self._resolve(relative, args[i + 2], args[i + 3])
                end = self._resolve(relative, args[i + 4], args[i + 5])
                self._cubic(c1, c2, end)

        elif upper == "S":
            for i in range(0, len(args) - 3, 4):
                c1 = self._reflected_control(("C", "S"))
                c2 = self._resolve(relative, args[i], args[i + 1])
                end = self._resolve(relative, args[i + 2], args[i + 3])
                self._cubic(c1, c2, end)
                # Later segments of the same command reflect off this one
                self.last_command = command

        elif upper == "Q":
            for i in range(0, len(args) - 3, 4):
                control = self._resolve(relative, args[i], args[i + 1])
                end = self._resolve(relative, args[i + 2], args[i + 3])
                self._quadratic(control, end)

        elif upper == "T":
            for i in range(0, len(args) - 1, 2):
                control = self._reflected_control(("Q", "T"))
                end = self._resolve(relative, args[i], args[i + 1])
                self._quadratic(control, end)
                self.last_command = command

        elif upper == "A":
            for i in range(0, len(args) - 6, 7):
                end = self._resolve(relative, args[i + 5], args[i + 6])
                for point in interpolate_line(self.current, end, self.bezier_steps):
                    self._emit(point)
                self.current = end

        elif upper == "Z":
            if self.current != self.start:
                self._emit(self.start)
            self.current = self.start
            self._closed = True
            self._finish_subpath()

    def _reflected_control(self, family: tuple[str, str]) -> Point:
        """First control point of a smooth curve.

        Reflects the previous control point through the current point when
        the previous command belongs to the same curve family, otherwise
        the current point itself.
        """
        if self.last_command.upper() in family:
            return Point(
                2 * self.current.x - self.last_control.x,
                2 * self.current.y - self.last_control.y,
            )
        return self.current

    def _cubic(self, c1: Point, c2: Point, end: Point) -> None:
        for point in tessellate_cubic_bezier(self.current, c1, c2, end, self.bezier_steps):
            self._emit(point)
        self.last_control = c2
        self.current = end

    def _quadratic(self, control: Point, end: Point) -> None:
        for point in tessellate_quadratic_bezier(self.current, control, end, self.bezier_steps):
            self._emit(point)
        self.last_control = control
        self.current = end


def parse_path_data(d: str, bezier_steps: int = DEFAULT_BEZIER_STEPS) -> list[Polyline]:
    """Flatten SVG path data into polylines, one per subpath."""
    return PathBuilder(bezier_steps).build(d)


class SvgParser:
    """Parses SVG text into a :class:`Document`.

    Example:
        document = SvgParser().parse(svg_text)
    """

    def __init__(self, tessellation: TessellationConfig | None = None) -> None:
        """Initialize the parser.

        Args:
            tessellation: Step count used for Bezier segments
        """
        self.tessellation = tessellation or TessellationConfig()

    def parse(self, text: str) -> Document:
        """Parse SVG markup.

        Args:
            text: SVG document text

        Returns:
            Document with the drawable primitives and the viewBox extent

        Raises:
            MalformedDocumentError: If the markup is not well-formed SVG
            EmptyDocumentError: If no drawable element produced a primitive
            DegenerateGeometryError: If the document size has no area
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise MalformedDocumentError("svg", str(e)) from e

        if _local_name(root.tag) != "svg":
            raise MalformedDocumentError(
                "svg", f"root element is <{_local_name(root.tag)}>, expected <svg>"
            )

        bbox = document_bbox(root)
        primitives: list[Primitive] = []
        skipped = 0

        for tag, element in iter_rendered(root):
            if tag in _STRUCTURAL_TAGS:
                continue
            produced = self._element_primitives(tag, element)
            if produced is None:
                logger.debug("Skipping unsupported SVG element", element=tag)
                skipped += 1
            elif not produced:
                logger.debug("Skipping SVG element without geometry", element=tag)
                skipped += 1
            else:
                primitives.extend(produced)

        if not primitives:
            raise EmptyDocumentError("svg", "no drawable elements")

        return Document(
            primitives=tuple(primitives),
            bbox=bbox,
            source_format=SourceFormat.SVG,
            skipped=skipped,
        )

    def _element_primitives(self, tag: str, element: ET.Element) -> list[Primitive] | None:
        """Primitives for one element; None if the element type is unsupported."""
        if tag == "path":
            d = element.get("d")
            if not d:
                return []
            return list(parse_path_data(d, self.tessellation.bezier_steps))

        if tag == "circle":
            r = _float_attr(element, "r")
            if r <= 0:
                return []
            center = Point(_float_attr(element, "cx"), _float_attr(element, "cy"))
            return [Circle(center=center, radius=r)]

        if tag == "rect":
            x = _float_attr(element, "x")
            y = _float_attr(element, "y")
            w = _float_attr(element, "width")
            h = _float_attr(element, "height")
            if w <= 0 or h <= 0:
                return []
            corners = (Point(x, y), Point(x + w, y), Point(x + w, y + h), Point(x, y + h))
            return [Polyline(vertices=corners, closed=True)]

        if tag == "ellipse":
            rx = _float_attr(element, "rx")
            ry = _float_attr(element, "ry")
            if rx <= 0 or ry <= 0:
                return []
            center = Point(_float_attr(element, "cx"), _float_attr(element, "cy"))
            return [Ellipse(center=center, semi_major=rx, semi_minor=ry, rotation=0.0)]

        if tag in ("polygon", "polyline"):
            values = _numbers(element.get("points", ""))
            vertices = tuple(
                Point(values[i], values[i + 1]) for i in range(0, len(values) - 1, 2)
            )
            if len(vertices) < 2:
                return []
            return [Polyline(vertices=vertices, closed=tag == "polygon")]

        if tag == "line":
            p1 = Point(_float_attr(element, "x1"), _float_attr(element, "y1"))
            p2 = Point(_float_attr(element, "x2"), _float_attr(element, "y2"))
            return [Line(p1=p1, p2=p2)]

        return None
