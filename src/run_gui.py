#!/usr/bin/env python3
"""Entry point for the ProPhoto Resume GUI."""

import os
import sys

SRC = os.path.dirname(os.path.abspath(__file__))
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from prophoto.ui.main_window import run

if __name__ == "__main__":
    run()
