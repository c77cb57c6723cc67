"""
Parchmint — command line entry point.

Usage:
    python -m parchmint check device.json
    python -m parchmint check device.json --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys

from parchmint.errors import DocumentReadError
from parchmint.report import check_file


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="parchmint",
                                description="Validate Parchmint microfluidic device files")
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("check", help="Parse and validate a Parchmint JSON file")
    c.add_argument("path", help="Path to the Parchmint .json file")
    c.add_argument("--verbose", action="store_true", help="Also emit debug logging to stderr")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "check":
        try:
            report = check_file(args.path)
        except DocumentReadError as exc:
            print(exc, file=sys.stderr)
            return 2

        print(report.log, end="")
        name = report.architecture.name if report.architecture else args.path
        print(f"{name}: {'valid' if report.valid else 'invalid'}")
        return 0 if report.valid else 1

    return 2


if __name__ == "__main__":
    sys.exit(main())
