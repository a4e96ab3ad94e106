"""Drawing I/O layer for beadstudio.

This module handles reading drawing files and parsing them into
documents.

Key responsibilities:
- Detect SVG vs DXF (extension, then content)
- Parse SVG markup and path data
- Parse the DXF group-code stream

Key classes:
- DrawingReader: Load a file from disk
- SvgParser: SVG text to Document
- DxfParser: DXF text to Document
"""

from beadstudio.io.dxf import DxfParser
from beadstudio.io.reader import DrawingReader, detect_format, parse_text
from beadstudio.io.svg import SvgParser, parse_path_data

__all__ = [
    "DrawingReader",
    "DxfParser",
    "SvgParser",
    "detect_format",
    "parse_path_data",
    "parse_text",
]
