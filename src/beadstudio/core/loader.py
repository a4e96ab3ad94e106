"""Load orchestration: drawing file to outline plus fill predicate.

This module ties the pipeline together:
1. Read and parse the file (SVG or DXF) into a Document
2. Extract the normalized outline
3. Build the fill predicate
4. Hand back a LoadedDrawing the caller can sample as often as it likes

Key components:
- LoadedDrawing: Immutable result of a load
- DrawingLoader: Runs the pipeline with the configured settings
"""

import dataclasses
import time
from dataclasses import dataclass
from pathlib import Path

from beadstudio.config import BeadStudioSettings, GridConfig
from beadstudio.core.contour import ContourExtractor
from beadstudio.core.fill import FillPredicate, build_fill_predicate
from beadstudio.core.sampler import GridSample, GridSampler
from beadstudio.core.transform import WorkspaceTransform
from beadstudio.domain import Contour, Document, SourceFormat
from beadstudio.exceptions import BeadStudioError
from beadstudio.io import DrawingReader, parse_text
from beadstudio.utils import LoadLogger


@dataclass(frozen=True)
class LoadedDrawing:
    """Everything the grid and outline renderers need from one load.

    Attributes:
        document: Parsed primitives and extent
        contour: Outline in normalized document space
        fill_predicate: Membership test over normalized document space
        width: Physical drawing width (document units times scale)
        height: Physical drawing height (document units times scale)
    """

    document: Document
    contour: Contour
    fill_predicate: FillPredicate
    width: float
    height: float

    def scaled(self, factor: float) -> "LoadedDrawing":
        """Same drawing at a different physical size.

        Only the physical size changes; outline and predicate stay in
        normalized document space and the workspace transform picks up
        the new size.

        Raises:
            ValueError: If factor is not positive
        """
        if factor <= 0:
            raise ValueError(f"Scale factor must be positive, got {factor}")
        return dataclasses.replace(
            self,
            width=self.document.width * factor,
            height=self.document.height * factor,
        )

    def transform_for(self, grid: GridConfig) -> WorkspaceTransform:
        """Transform centering this drawing in the grid's workspace."""
        return WorkspaceTransform.centered(
            self.width, self.height, grid.workspace_width, grid.workspace_height
        )

    def sample(self, grid: GridConfig, sampler: GridSampler | None = None) -> GridSample:
        """Sample this drawing onto a bead lattice."""
        sampler = sampler or GridSampler()
        return sampler.sample(self.fill_predicate, grid, self.transform_for(grid))


class DrawingLoader:
    """Runs the load pipeline with the configured settings.

    Example:
        loader = DrawingLoader(BeadStudioSettings())
        drawing = loader.load(Path("heart.svg"))
        result = drawing.sample(GridConfig(topology=GridTopology.PEYOTE))
    """

    def __init__(
        self,
        settings: BeadStudioSettings | None = None,
        load_logger: LoadLogger | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            settings: Pipeline settings (defaults if None)
            load_logger: Statistics logger (a fresh one if None)
        """
        self.settings = settings or BeadStudioSettings()
        self.load_logger = load_logger or LoadLogger()
        self.extractor = ContourExtractor(self.settings.tessellation, self.settings.stitch)

    def load(self, path: Path) -> LoadedDrawing:
        """Load a drawing file.

        Args:
            path: SVG or DXF file

        Returns:
            The loaded drawing

        Raises:
            FileNotFoundError: If the file does not exist
            BeadStudioError: If the file cannot be read or parsed
        """
        reader = DrawingReader(path, self.settings.tessellation)
        start_time = time.perf_counter()
        self.load_logger.log_load_start(str(path), path.suffix.lstrip(".").lower() or "?")
        try:
            document = reader.load()
        except BeadStudioError as e:
            self.load_logger.log_load_error(str(path), e)
            raise
        return self._finish(document, str(path), start_time)

    def load_text(
        self,
        text: str,
        source_format: SourceFormat,
        source: str = "<text>",
    ) -> LoadedDrawing:
        """Load a drawing from text already in memory.

        Raises:
            BeadStudioError: If the text cannot be parsed
        """
        start_time = time.perf_counter()
        self.load_logger.log_load_start(source, source_format.value)
        try:
            document = parse_text(text, source_format, self.settings.tessellation)
        except BeadStudioError as e:
            self.load_logger.log_load_error(source, e)
            raise
        return self._finish(document, source, start_time)

    def from_document(self, document: Document) -> LoadedDrawing:
        """Derive outline and fill predicate for an already parsed document."""
        contour = self.extractor.extract(document)
        fill_predicate = build_fill_predicate(
            document,
            fill=self.settings.fill,
            tessellation=self.settings.tessellation,
            stitch_config=self.settings.stitch,
        )
        return LoadedDrawing(
            document=document,
            contour=contour,
            fill_predicate=fill_predicate,
            width=document.width,
            height=document.height,
        )

    def _finish(self, document: Document, source: str, start_time: float) -> LoadedDrawing:
        drawing = self.from_document(document)
        self.load_logger.log_contour_source(source, drawing.contour.source, len(drawing.contour))
        self.load_logger.log_load_complete(
            source,
            primitives=len(document.primitives),
            skipped=document.skipped,
            width=drawing.width,
            height=drawing.height,
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return drawing
