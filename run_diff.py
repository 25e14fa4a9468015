#!/usr/bin/env python
"""Compare two API description documents from the command line."""

import argparse
import json
import logging
import sys

from discodiff import (
    DiffOptions,
    DiffRunner,
    DiscoDiffError,
    EngineConfig,
    render_diff,
)


def main():
    parser = argparse.ArgumentParser(
        description="Report changes between two API description documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_diff.py old.json new.json
  python run_diff.py old.json new.json --skip descriptions versioning
  python run_diff.py old.json new.json --only schemas --json report.json
        """
    )

    parser.add_argument("old", help="Path to the baseline JSON/YAML document")
    parser.add_argument("new", help="Path to the newer JSON/YAML document")
    parser.add_argument(
        "--only",
        nargs="+",
        choices=DiffOptions.names(),
        help="Compare only these categories (identifiers are always compared)"
    )
    parser.add_argument(
        "--skip",
        nargs="+",
        choices=DiffOptions.names(),
        default=[],
        help="Categories to leave out"
    )
    parser.add_argument("-j", "--json", dest="json_path", help="Also write the diff tree as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    options = DiffOptions.from_names(args.only) if args.only else DiffOptions.ALL
    options = options.without(*args.skip)

    runner = DiffRunner(args.old, args.new, EngineConfig(options=options))
    try:
        entries = runner.run()
    except DiscoDiffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    sys.stdout.write(render_diff(entries))

    if args.json_path:
        with open(args.json_path, 'w') as f:
            json.dump([e.to_dict() for e in entries], indent=2, fp=f)

    # Return exit code
    return 1 if entries else 0


if __name__ == "__main__":
    sys.exit(main())
