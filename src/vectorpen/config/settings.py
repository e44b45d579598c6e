"""Configuration settings for Vectorpen."""

from pathlib import Path

from pydantic import BaseModel, Field


class PenConfig(BaseModel):
    """Configuration for the pen tool gestures.

    All distances are in the same coordinate space as pointer input.
    """

    anchor_pick_radius: float = Field(
        default=10.0,
        gt=0.0,
        le=50.0,
        description="Radius around a point anchor that starts a connection",
    )
    snap_radius: float = Field(
        default=15.0,
        gt=0.0,
        le=50.0,
        description="Radius around another point anchor that snaps a connection to it",
    )
    drag_threshold: float = Field(
        default=5.0,
        ge=0.0,
        le=50.0,
        description="Movement from the drag origin before a gesture counts as a drag",
    )
    handle_pick_radius: float = Field(
        default=6.0,
        gt=0.0,
        le=50.0,
        description="Radius of anchor and control-handle circles",
    )
    midpoint_pick_radius: float = Field(
        default=12.0,
        gt=0.0,
        le=50.0,
        description="Radius of the line-to-curve affordance at a line midpoint",
    )
    curve_mode: bool = Field(
        default=False,
        description="Create curves on drag even without Shift held",
    )


class HitTestConfig(BaseModel):
    """Configuration for stroke hit testing."""

    tolerance: float = Field(
        default=5.0,
        ge=0.0,
        le=50.0,
        description="Extra distance added to half the stroke width",
    )
    min_samples: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Minimum number of arc-length samples",
    )
    sample_spacing: float = Field(
        default=10.0,
        gt=0.0,
        le=100.0,
        description="Arc length covered by one sample on long paths",
    )
    flatten_tolerance: float = Field(
        default=0.25,
        ge=0.01,
        le=10.0,
        description="Tolerance for cubic curve flattening",
    )


class ShapeToolConfig(BaseModel):
    """Configuration for the polygon and star tools."""

    polygon_sides: int = Field(default=5, ge=3, le=100, description="Sides of new polygons")
    polygon_radius: float = Field(default=50.0, gt=0.0, description="Radius of new polygons")
    star_points: int = Field(default=5, ge=3, le=100, description="Points of new stars")
    star_outer_radius: float = Field(default=50.0, gt=0.0, description="Outer star radius")
    star_inner_radius: float = Field(default=25.0, gt=0.0, description="Inner star radius")
    vertex_pick_radius: float = Field(
        default=5.0,
        gt=0.0,
        le=50.0,
        description="Radius of polygon vertex circles",
    )


class StyleConfig(BaseModel):
    """Default styling for newly created shapes."""

    path_fill: str = Field(default="none", description="Fill of new paths")
    path_stroke: str = Field(default="#3B82F6", description="Stroke of new paths")
    path_stroke_width: float = Field(default=2.0, ge=0.0, description="Stroke width of new paths")
    shape_fill: str = Field(default="#3B82F6", description="Fill of new simple shapes")
    shape_stroke: str = Field(default="#1E40AF", description="Stroke of new simple shapes")
    shape_stroke_width: float = Field(
        default=2.0, ge=0.0, description="Stroke width of new simple shapes"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class EditorSettings(BaseModel):
    """Main application settings."""

    pen: PenConfig = Field(default_factory=PenConfig)
    hit_test: HitTestConfig = Field(default_factory=HitTestConfig)
    shapes: ShapeToolConfig = Field(default_factory=ShapeToolConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> EditorSettings:
    """Get default application settings."""
    return EditorSettings()
