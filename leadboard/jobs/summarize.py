"""CLI job to ingest a directory export and print dashboard metrics."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from leadboard.core.config import get_settings
from leadboard.core.store import FILTER_KINDS, DatasetStore
from leadboard.etl.csv_reader import CsvIngestError, decode_csv_bytes
from leadboard.etl.export import to_csv

logger = logging.getLogger(__name__)


def read_csv_file(path: Path) -> str:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise CsvIngestError(f"Unable to read {path}: {exc}") from exc
    return decode_csv_bytes(data)


def run_summary(
    *,
    path: Optional[Path],
    top_n: Optional[int],
    kind: str = "all",
    min_score: int = 0,
    search: str = "",
    export_path: Optional[Path] = None,
) -> dict:
    store = DatasetStore()
    if path is None:
        logger.info("No input file given; loading the default dataset")
        store.load_default()
    else:
        logger.info("Loading companies from %s", path)
        store.load_text(read_csv_file(path))

    if not len(store):
        logger.warning("No companies found; metrics will be empty.")

    companies = store.filter(kind=kind, min_score=min_score, search=search)
    logger.info("Summarizing %d of %d companies", len(companies), len(store))

    if export_path is not None:
        export_path.write_text(to_csv(companies), encoding="utf-8")
        logger.info("Wrote %d companies to %s", len(companies), export_path)

    return store.metrics(kind=kind, min_score=min_score, search=search, top_n=top_n).to_dict()


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{raw!r} is not an integer") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarize a scraped business directory CSV")
    parser.add_argument("path", nargs="?", type=Path, help="CSV file to ingest (defaults to the bundled dataset)")
    parser.add_argument(
        "--top-n",
        dest="top_n",
        type=_positive_int,
        default=get_settings().top_n,
        help="Number of categories and locations to rank",
    )
    parser.add_argument("--type", dest="kind", choices=FILTER_KINDS, default="all", help="Restrict to staff or clients")
    parser.add_argument("--min-score", dest="min_score", type=int, default=0, help="Minimum lead score")
    parser.add_argument("--search", dest="search", default="", help="Free-text filter on name, category and city")
    parser.add_argument("--export", dest="export_path", type=Path, help="Write the filtered companies to this CSV file")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        summary = run_summary(
            path=args.path,
            top_n=args.top_n,
            kind=args.kind,
            min_score=args.min_score,
            search=args.search,
            export_path=args.export_path,
        )
    except CsvIngestError as exc:
        logger.error("Ingestion failed: %s", exc)
        return 2

    json.dump(summary, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
