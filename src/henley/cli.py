import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config.settings import Settings
from henley.errors import HenleyError
from henley.pipeline import generate_dataset

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build the Henley visa overlay from Henley Passport Index PDFs.")
    parser.add_argument("origins", nargs="*", help="ISO-2 origin codes (default: HENLEY_ORIGINS)")
    parser.add_argument("--strategy", choices=["layout", "glyph"], help="PDF reading strategy")
    parser.add_argument("--pdf-dir", type=Path, help="Directory holding {ISO}_visa_full.pdf files")
    parser.add_argument("--offline", action="store_true", help="Never download; use local PDFs only")
    parser.add_argument("--allow-empty", action="store_true", help="Write the dataset even when nothing was parsed")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s [%(levelname)s] %(message)s")

    settings = Settings.from_env()
    overrides = {}
    if args.strategy:
        overrides["henley_strategy"] = args.strategy
    if args.pdf_dir:
        overrides["henley_pdf_dir"] = args.pdf_dir
    if args.offline:
        overrides["henley_offline"] = True
    if args.allow_empty:
        overrides["allow_empty_dataset"] = True
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        dataset, meta = asyncio.run(generate_dataset(settings, args.origins or None))
    except HenleyError as exc:
        logger.error("Henley generation failed: %s", exc)
        return 1

    for status in meta.sources:
        count = len(dataset.matrix.get(status.origin_iso, {}))
        print(f"[{status.origin_iso}] {status.status}: {count} destinations")
    return 0


if __name__ == "__main__":
    sys.exit(main())
