#!/usr/bin/env python3
"""
MFEA ALERT allocation check.

Usage:
    python scripts/run_check.py
    python scripts/run_check.py --force --title "Daily Allocation Update"
    python scripts/run_check.py --json
    python scripts/run_check.py -v
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure mfea_alert is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mfea_alert.errors import MfeaError
from mfea_alert.pipeline.check import run_sync


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Check the MFEA allocation and notify on change",
    )
    parser.add_argument("--force", "-f", action="store_true", help="Notify even if unchanged")
    parser.add_argument(
        "--title", "-t", type=str, default="Allocation Update", help="Notification title"
    )
    parser.add_argument("--json", "-j", action="store_true", help="Output JSON only")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        result = run_sync(force_notify=args.force, title=args.title)
    except MfeaError as exc:
        print(json.dumps(exc.to_dict(), indent=2))
        return 1

    if args.json:
        print(result.to_json())
    else:
        print()
        print("=" * 60)
        print("MFEA ALLOCATION CHECK")
        print("=" * 60)
        print(f"Previous: {result.previous or 'unknown'}")
        print(f"Current:  {result.current}")
        print(f"Changed:  {'yes' if result.changed else 'no'}")
        print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
