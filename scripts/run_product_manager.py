#!/usr/bin/env python3
"""
Interactive console product manager.

Menu-driven CRUD over an in-process list (nothing is saved on exit).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Add repo root to path so `catalog.*` imports work when running from scripts/
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog.console import run_menu


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Interactive e-commerce product manager")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Optional path to a log file")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, log_file=args.log_file)
    logger = logging.getLogger(__name__)

    try:
        manager = run_menu()
        logger.debug("Session ended with %d products", len(manager))
        return 0
    except KeyboardInterrupt:
        logger.warning("Product manager interrupted by user")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
