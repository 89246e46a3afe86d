"""Configuration settings for WaveLab."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class CanvasConfig:
    """Logical design canvas that every silhouette is generated on."""

    WIDTH: int = 1440
    HEIGHT: int = 320

    def __post_init__(self) -> None:
        if self.WIDTH <= 0 or self.HEIGHT <= 0:
            raise ValueError(
                f"Canvas size must be positive, got {self.WIDTH}x{self.HEIGHT}"
            )


@dataclass
class ControlConfig:
    """Defaults and valid ranges for user-facing wave controls."""

    # Wave body height (distance of the baseline from the anchor edge)
    DEFAULT_HEIGHT: float = 220.0
    MIN_HEIGHT: float = 80.0
    MAX_HEIGHT: float = 320.0
    FALLBACK_HEIGHT: float = 120.0

    DEFAULT_INTENSITY: float = 0.6
    FALLBACK_INTENSITY: float = 0.2

    # Exported pixel dimensions
    DEFAULT_OUTPUT_WIDTH: int = 1440
    DEFAULT_OUTPUT_HEIGHT: int = 320
    MIN_OUTPUT_WIDTH: int = 120
    MAX_OUTPUT_WIDTH: int = 8192
    MIN_OUTPUT_HEIGHT: int = 80
    MAX_OUTPUT_HEIGHT: int = 4096

    DEFAULT_FILL_COLOR: str = "#f97373"
    DEFAULT_BACKGROUND_COLOR: str = "#ffffff"

    # Step used by shift+arrow nudges
    NUDGE_AMOUNT: int = 8

    def __post_init__(self) -> None:
        if self.MIN_HEIGHT >= self.MAX_HEIGHT:
            raise ValueError("MIN_HEIGHT must be < MAX_HEIGHT")
        if not self.MIN_HEIGHT <= self.FALLBACK_HEIGHT <= self.MAX_HEIGHT:
            raise ValueError(
                f"FALLBACK_HEIGHT must lie in [{self.MIN_HEIGHT}, {self.MAX_HEIGHT}]"
            )
        if not 0.0 <= self.FALLBACK_INTENSITY <= 1.0:
            raise ValueError("FALLBACK_INTENSITY must be between 0 and 1")
        if self.MIN_OUTPUT_WIDTH <= 0 or self.MIN_OUTPUT_HEIGHT <= 0:
            raise ValueError("Minimum output dimensions must be positive")
        if self.MIN_OUTPUT_WIDTH > self.MAX_OUTPUT_WIDTH:
            raise ValueError("MIN_OUTPUT_WIDTH must be <= MAX_OUTPUT_WIDTH")
        if self.MIN_OUTPUT_HEIGHT > self.MAX_OUTPUT_HEIGHT:
            raise ValueError("MIN_OUTPUT_HEIGHT must be <= MAX_OUTPUT_HEIGHT")
        if self.NUDGE_AMOUNT <= 0:
            # Non-positive nudge amounts fall back to the stock step
            self.NUDGE_AMOUNT = 8


@dataclass
class MorphConfig:
    """Timing of the animated transition between two silhouettes."""

    DURATION_MS: float = 520.0

    # Frame rate used by the blocking scheduler and the GIF renderer
    FRAME_RATE: int = 60

    def __post_init__(self) -> None:
        if self.DURATION_MS <= 0:
            raise ValueError(f"DURATION_MS must be positive, got {self.DURATION_MS}")
        if self.FRAME_RATE <= 0 or self.FRAME_RATE > 240:
            raise ValueError(
                f"FRAME_RATE must be between 1 and 240, got {self.FRAME_RATE}"
            )


@dataclass
class ExportConfig:
    """Raster export settings."""

    JPEG_QUALITY: int = 92

    def __post_init__(self) -> None:
        if not 1 <= self.JPEG_QUALITY <= 95:
            raise ValueError(
                f"JPEG_QUALITY must be between 1 and 95, got {self.JPEG_QUALITY}"
            )


@dataclass
class PathConfig:
    """Configuration for file paths and directories."""

    OUTPUT_DIR: Path = Path("exports")
    LOGS_DIR: Path = Path("logs")


# Default instances
DEFAULT_CANVAS_CONFIG = CanvasConfig()
DEFAULT_CONTROL_CONFIG = ControlConfig()
DEFAULT_MORPH_CONFIG = MorphConfig()
DEFAULT_EXPORT_CONFIG = ExportConfig()
DEFAULT_PATH_CONFIG = PathConfig()
