#!/usr/bin/env python3
"""
Inspect half-precision encodings or pretty-print a file of packed halves.
"""

from half_inspect import main


if __name__ == "__main__":
    raise SystemExit(main())
