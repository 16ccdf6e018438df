#!/usr/bin/env python3
"""Cron / CI entry.

Needs the package importable: run ``pip install .`` once in the checkout, or
call ``python -m sspcheckin.cli_checkin`` from the repository root instead.
"""
from __future__ import annotations

import sys

from sspcheckin.cli_checkin import main

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
