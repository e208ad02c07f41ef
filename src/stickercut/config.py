from dataclasses import dataclass
from pathlib import Path


@dataclass
class Settings:
    output_dir: Path = Path("output")
    merge_threshold: int = 15
    padding: int = 5
    min_pixel_count: int = 50
    min_extent: int = 5
    naming_batch_size: int = 3
    naming_model: str = "gemini-2.5-flash"

    def __post_init__(self) -> None:
        if self.padding < 1:
            raise ValueError(f"padding must be at least 1, got {self.padding}")
        if self.merge_threshold < 0:
            raise ValueError(f"merge_threshold must be non-negative, got {self.merge_threshold}")
