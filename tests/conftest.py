"""Shared test helpers."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def build_dxf(*entities: list[tuple[int, object]], with_entities_section: bool = True) -> str:
    """Assemble a minimal ASCII DXF document.

    Each entity is a list of (group code, value) pairs starting with its
    ``(0, TYPE)`` marker.
    """
    lines: list[str] = []
    if with_entities_section:
        lines += ["0", "SECTION", "2", "ENTITIES"]
    for entity in entities:
        for code, value in entity:
            lines += [str(code), str(value)]
    if with_entities_section:
        lines += ["0", "ENDSEC"]
    lines += ["0", "EOF"]
    return "\n".join(lines) + "\n"


def dxf_line(x1: float, y1: float, x2: float, y2: float) -> list[tuple[int, object]]:
    return [(0, "LINE"), (8, "0"), (10, x1), (20, y1), (11, x2), (21, y2)]


def dxf_circle(cx: float, cy: float, r: float) -> list[tuple[int, object]]:
    return [(0, "CIRCLE"), (8, "0"), (10, cx), (20, cy), (40, r)]


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample drawings."""
    return FIXTURES_DIR
