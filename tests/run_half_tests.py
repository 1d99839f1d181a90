#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterator, List, Optional
import unittest

# Test ids containing these markers walk all 65536 half patterns.
EXHAUSTIVE_MARKERS = ("every_pattern", "exhaustive")


def _iter_tests(suite: unittest.TestSuite) -> Iterator[unittest.TestCase]:
    for item in suite:
        if isinstance(item, unittest.TestSuite):
            yield from _iter_tests(item)
        else:
            yield item


def _select(suite: unittest.TestSuite, filter_substr: Optional[str], quick: bool) -> List[unittest.TestCase]:
    selected = []
    for test in _iter_tests(suite):
        name = test.id()
        if filter_substr and filter_substr not in name:
            continue
        if quick and any(marker in name for marker in EXHAUSTIVE_MARKERS):
            continue
        selected.append(test)
    return selected


def main() -> int:
    parser = argparse.ArgumentParser(description="Run halfcodec tests")
    parser.add_argument("--list", action="store_true", help="List tests and exit")
    parser.add_argument("--filter", help="Substring filter for test ids")
    parser.add_argument("--quick", action="store_true", help="Skip exhaustive 16-bit sweeps")
    parser.add_argument("--failfast", action="store_true", help="Stop on first failure")
    args = parser.parse_args()

    start_dir = Path(__file__).resolve().parent
    suite = unittest.TestLoader().discover(
        start_dir=str(start_dir),
        pattern="test_*.py",
        top_level_dir=str(start_dir),
    )
    tests = _select(suite, args.filter, args.quick)

    if args.list:
        for test in tests:
            print(test.id())
        return 0

    if not tests:
        print("error: no tests selected", file=sys.stderr)
        return 1

    runner = unittest.TextTestRunner(verbosity=2, failfast=args.failfast)
    result = runner.run(unittest.TestSuite(tests))
    return 0 if result.wasSuccessful() else 1


if __name__ == "__main__":
    raise SystemExit(main())
