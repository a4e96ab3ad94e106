"""Exception hierarchy for Bead Studio."""


class BeadStudioError(Exception):
    """Base exception for all Bead Studio errors."""

    pass


class DocumentError(BeadStudioError):
    """Errors related to loading a drawing."""

    pass


class DocumentLoadError(DocumentError):
    """Error reading a drawing file from disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load drawing '{path}': {reason}")


class UnsupportedFormatError(DocumentError):
    """The file is neither SVG nor DXF."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Unsupported drawing format '{path}': expected SVG or DXF")


class MalformedDocumentError(DocumentError):
    """Markup or group-code stream that cannot be parsed."""

    def __init__(self, source_format: str, reason: str) -> None:
        self.source_format = source_format
        self.reason = reason
        super().__init__(f"Malformed {source_format.upper()} document: {reason}")


class EmptyDocumentError(DocumentError):
    """Document parsed but holds no drawable primitives."""

    def __init__(self, source_format: str, reason: str) -> None:
        self.source_format = source_format
        self.reason = reason
        super().__init__(f"Empty {source_format.upper()} document: {reason}")


class GeometryError(BeadStudioError):
    """Errors in geometric calculations."""

    pass


class DegenerateGeometryError(GeometryError, DocumentError):
    """Bounding box with zero or non-finite extent."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Degenerate geometry: {reason}")


class ContourError(GeometryError):
    """Error with contour data or operations."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
