#!/usr/bin/env python3
"""
Write the JSON Schemas for the evaluator's request, response and evaluation
payloads into a directory (default: schemas/).

Usage:
  PYTHONPATH=. python3 scripts/export_schemas.py [target_dir]
"""

import sys
from pathlib import Path

from libs.core.schemas import SCHEMA_TARGETS, export_schemas


def main(argv: list[str]) -> int:
    target_dir = Path(argv[1]) if len(argv) > 1 else Path("schemas")
    export_schemas(target_dir)
    print(f"Wrote {len(SCHEMA_TARGETS) + 1} schemas to {target_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
