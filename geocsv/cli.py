# =============================================================================
# geocsv Command Line
# =============================================================================
# Converts a CSV file into a GeoJSON FeatureCollection.
#
# Usage:
#   geocsv points.csv --x-field lon --y-field lat -o points.geojson
#   geocsv shapes.csv --wkt-field wkt
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .collection import GeoCSV
from .errors import GeoCSVError
from .models import GeoCSVOptions

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geocsv",
        description="Convert a UTF-8 or GBK encoded CSV file into GeoJSON.",
    )
    parser.add_argument("input", type=Path, help="CSV file to convert")
    parser.add_argument("--x-field", help="Header of the X/longitude column")
    parser.add_argument("--y-field", help="Header of the Y/latitude column")
    parser.add_argument("--wkt-field", help="Header of the WKT geometry column")
    parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write GeoJSON here instead of stdout",
    )
    parser.add_argument("--indent", type=int, default=None, help="JSON indentation")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not args.wkt_field and not (args.x_field and args.y_field):
        parser.error("either --wkt-field or both --x-field and --y-field are required")

    options = GeoCSVOptions(
        x_field=args.x_field,
        y_field=args.y_field,
        wkt_field=args.wkt_field,
    )

    try:
        geocsv = GeoCSV.read(args.input, options)
    except GeoCSVError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not geocsv.is_valid():
        log.warning(
            f"'{args.input}' has no rows or lacks the configured geometry columns; "
            f"headers: {list(geocsv.headers)}"
        )

    geojson = geocsv.to_feature_collection().to_geojson(indent=args.indent)

    if args.output is None:
        sys.stdout.write(geojson + "\n")
    else:
        args.output.write_text(geojson + "\n", encoding="utf-8")
        log.info(f"Wrote {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
