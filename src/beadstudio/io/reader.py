"""Drawing reader for loading SVG/DXF files.

This module provides the DrawingReader class for loading drawing files
and parsing them into Document domain models.
"""

from pathlib import Path

from beadstudio.config import TessellationConfig
from beadstudio.domain import Document, SourceFormat
from beadstudio.exceptions import DocumentLoadError, UnsupportedFormatError
from beadstudio.io.dxf import DxfParser
from beadstudio.io.svg import SvgParser

_EXTENSIONS = {
    ".svg": SourceFormat.SVG,
    ".dxf": SourceFormat.DXF,
}


def decode_text(data: bytes) -> str:
    """Decode file bytes as UTF-8, falling back to Latin-1 for legacy DXF."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def sniff_format(text: str) -> SourceFormat | None:
    """Guess the format from the first meaningful content."""
    head = text.lstrip()[:512]
    if head.startswith("<") and ("<svg" in head or head.startswith("<?xml")):
        return SourceFormat.SVG
    lines = [line.strip() for line in head.splitlines()[:2]]
    if len(lines) == 2 and lines[0] == "0" and lines[1].upper() in ("SECTION", "EOF"):
        return SourceFormat.DXF
    # Some exporters start with a comment group (999)
    if lines and lines[0] == "999":
        return SourceFormat.DXF
    return None


def detect_format(path: Path, text: str) -> SourceFormat:
    """Format from the file extension, else from the content.

    Raises:
        UnsupportedFormatError: If neither identifies SVG or DXF
    """
    by_extension = _EXTENSIONS.get(path.suffix.lower())
    if by_extension is not None:
        return by_extension
    sniffed = sniff_format(text)
    if sniffed is None:
        raise UnsupportedFormatError(str(path))
    return sniffed


def parse_text(
    text: str,
    source_format: SourceFormat,
    tessellation: TessellationConfig | None = None,
) -> Document:
    """Parse drawing text with the parser for its format."""
    if source_format == SourceFormat.SVG:
        return SvgParser(tessellation).parse(text)
    return DxfParser().parse(text)


class DrawingReader:
    """Loads SVG/DXF drawings into documents.

    Example:
        reader = DrawingReader(Path("heart.svg"))
        reader.load()
        print(reader.format, reader.document.width)
    """

    def __init__(self, path: Path, tessellation: TessellationConfig | None = None) -> None:
        """Initialize the drawing reader.

        Args:
            path: Path to the SVG or DXF file
            tessellation: Step counts used while flattening SVG paths
        """
        self._path = path
        self._tessellation = tessellation
        self._format: SourceFormat | None = None
        self._document: Document | None = None

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Document:
        """Read and parse the file.

        Returns:
            The parsed document

        Raises:
            FileNotFoundError: If the file does not exist
            DocumentLoadError: If the file cannot be read
            UnsupportedFormatError: If the format cannot be determined
            DocumentError: If parsing fails (malformed, empty, degenerate)
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Drawing file not found: {self._path}")

        try:
            data = self._path.read_bytes()
        except OSError as e:
            raise DocumentLoadError(str(self._path), str(e)) from e

        text = decode_text(data)
        self._format = detect_format(self._path, text)
        self._document = parse_text(text, self._format, self._tessellation)
        return self._document

    @property
    def format(self) -> SourceFormat:
        """Return the detected format.

        Raises:
            RuntimeError: If the drawing has not been loaded yet
        """
        if self._format is None:
            raise RuntimeError("Drawing not loaded. Call load() first.")
        return self._format

    @property
    def document(self) -> Document:
        """Return the parsed document.

        Raises:
            RuntimeError: If the drawing has not been loaded yet
        """
        if self._document is None:
            raise RuntimeError("Drawing not loaded. Call load() first.")
        return self._document
