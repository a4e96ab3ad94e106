"""Workspace <-> document coordinate transform.

A drawing of physical size ``file_width x file_height`` is centered in a
workspace of ``workspace_width x workspace_height``. Both sides of the
transform are normalized: workspace coordinates are fractions of the
workspace, document coordinates are fractions of the drawing's bounding
box. The grid sampler and the outline renderer must use this one
transform so that what is drawn and what is sampled agree.
"""

from dataclasses import dataclass

from beadstudio.domain import Contour, Point


@dataclass(frozen=True, slots=True)
class WorkspaceTransform:
    """Scale-and-center mapping between workspace and document space.

    Attributes:
        scale_x: Drawing width as a fraction of the workspace width
        scale_y: Drawing height as a fraction of the workspace height
        offset_x: Normalized left margin that centers the drawing
        offset_y: Normalized top margin that centers the drawing
    """

    scale_x: float = 1.0
    scale_y: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    @classmethod
    def identity(cls) -> "WorkspaceTransform":
        """Workspace and document coincide (no drawing loaded)."""
        return cls()

    @classmethod
    def centered(
        cls,
        file_width: float,
        file_height: float,
        workspace_width: float,
        workspace_height: float,
    ) -> "WorkspaceTransform":
        """Center a drawing of the given physical size in the workspace.

        A drawing without a usable size falls back to the identity.
        """
        if not file_width or not file_height or not workspace_width or not workspace_height:
            return cls.identity()
        scale_x = file_width / workspace_width
        scale_y = file_height / workspace_height
        return cls(
            scale_x=scale_x,
            scale_y=scale_y,
            offset_x=(1.0 - scale_x) / 2.0,
            offset_y=(1.0 - scale_y) / 2.0,
        )

    def to_document(self, workspace_x: float, workspace_y: float) -> tuple[float, float]:
        """Map normalized workspace coordinates into normalized document space."""
        return (
            (workspace_x - self.offset_x) / self.scale_x,
            (workspace_y - self.offset_y) / self.scale_y,
        )

    def to_workspace(self, file_x: float, file_y: float) -> tuple[float, float]:
        """Map normalized document coordinates into normalized workspace space."""
        return (
            self.offset_x + file_x * self.scale_x,
            self.offset_y + file_y * self.scale_y,
        )

    def project_contour(self, contour: Contour) -> list[Point]:
        """Outline points in normalized workspace coordinates, for drawing."""
        return [Point(*self.to_workspace(p.x, p.y)) for p in contour.points]
