from __future__ import annotations

import os
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class GlyphThresholds(BaseModel):
    """
    Tuning for the pixel heuristic that tells an "X" icon from a checkmark.

    The ratios were calibrated against Henley PDFs rendered by MuPDF; other
    rasterisers anti-alias differently and shift the dark-pixel ratio, so
    recalibrate with the bitmap fixtures in tests/test_glyph.py when changing
    the rendering engine.
    """

    icon_box_size: int = 24
    icon_offset_x: int = 10
    icon_offset_y: int = 4
    scale: float = 2.0
    min_dark_ratio: float = 0.03
    min_diagonal_ratio: float = 0.32
    luminance_cutoff: float = 180.0
    diagonal_tolerance: int = 1
    line_tolerance: float = 3.0


class LayoutOptions(BaseModel):
    line_tolerance: float = 2.0
    column_gap: float = 40.0


class Settings(BaseModel):
    data_dir: Path = Path("data")
    source_csv: Path = Path("data/passport-index-matrix.csv")
    generated_dir: Path = Path("data/generated")
    min_columns: int = 50

    henley_output: Path = Path("public/data/visa-matrix.generated.json")
    henley_meta: Path = Path("public/data/visa-matrix.generated.meta.json")
    henley_pdf_dir: Optional[Path] = None
    henley_download_base: str = "https://cdn.henleyglobal.com/storage/app/media/HPI"
    henley_origins: List[str] = Field(default_factory=lambda: ["AR", "CL", "CO", "ES", "MX"])
    henley_strategy: Literal["layout", "glyph"] = "layout"
    henley_timeout: float = 30.0
    henley_offline: bool = False
    allow_empty_dataset: bool = False

    glyph: GlyphThresholds = Field(default_factory=GlyphThresholds)
    layout: LayoutOptions = Field(default_factory=LayoutOptions)

    admin_key: Optional[str] = None
    site_base_url: str = "https://www.necesitovisa.com"
    build_log_path: Path = Path("build.log")

    @property
    def index_path(self) -> Path:
        return self.generated_dir / "index.json"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables (and a local .env file).
        """
        load_dotenv()
        data_dir = Path(os.getenv("VISA_DATA_DIR", "data"))
        glyph = GlyphThresholds(
            min_dark_ratio=float(os.getenv("HENLEY_MIN_DARK_RATIO", "0.03")),
            min_diagonal_ratio=float(os.getenv("HENLEY_MIN_DIAGONAL_RATIO", "0.32")),
        )
        pdf_dir = os.getenv("HENLEY_PDF_DIR")
        origins = os.getenv("HENLEY_ORIGINS")
        return cls(
            data_dir=data_dir,
            source_csv=Path(os.getenv("VISA_SOURCE_CSV", str(data_dir / "passport-index-matrix.csv"))),
            generated_dir=Path(os.getenv("VISA_GENERATED_DIR", str(data_dir / "generated"))),
            min_columns=int(os.getenv("VISA_MIN_COLUMNS", "50")),
            henley_output=Path(os.getenv("HENLEY_OUTPUT_PATH", "public/data/visa-matrix.generated.json")),
            henley_meta=Path(os.getenv("HENLEY_META_PATH", "public/data/visa-matrix.generated.meta.json")),
            henley_pdf_dir=Path(pdf_dir) if pdf_dir else None,
            henley_download_base=os.getenv(
                "HENLEY_DOWNLOAD_BASE", "https://cdn.henleyglobal.com/storage/app/media/HPI"
            ),
            henley_origins=[code.strip().upper() for code in origins.split(",") if code.strip()]
            if origins
            else ["AR", "CL", "CO", "ES", "MX"],
            henley_strategy=os.getenv("HENLEY_STRATEGY", "layout"),
            henley_timeout=float(os.getenv("HENLEY_TIMEOUT", "30")),
            henley_offline=os.getenv("HENLEY_OFFLINE") == "1",
            allow_empty_dataset=os.getenv("ALLOW_EMPTY_DATASET") == "1",
            glyph=glyph,
            admin_key=os.getenv("ADMIN_KEY") or None,
            site_base_url=os.getenv("SITE_BASE_URL", "https://www.necesitovisa.com"),
            build_log_path=Path(os.getenv("BUILD_LOG_PATH", "build.log")),
        )
