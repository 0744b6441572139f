import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config.settings import Settings
from pipeline.builder import run_build
from pipeline.errors import DatasetBuildError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate per-origin visa datasets from the passport-index CSV.")
    parser.add_argument("--source", type=Path, help="Passport-index matrix CSV (default: VISA_SOURCE_CSV)")
    parser.add_argument("--out", type=Path, help="Output directory (default: VISA_GENERATED_DIR)")
    parser.add_argument("--min-columns", type=int, help="Minimum destination columns before the header is rejected")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def build_main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s [%(levelname)s] %(message)s")

    settings = Settings.from_env()
    overrides = {}
    if args.source:
        overrides["source_csv"] = args.source
    if args.out:
        overrides["generated_dir"] = args.out
    if args.min_columns is not None:
        overrides["min_columns"] = args.min_columns
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        result = run_build(settings)
    except DatasetBuildError as exc:
        logger.error("Build failed: %s", exc)
        return 1

    print(f"Generated {len(result.origins)} origins in {settings.generated_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(build_main())
