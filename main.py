#!/usr/bin/env python3
"""
Sign comparison - command-line entry point.

Usage:
    python main.py --candidate capture.json --library signs.json
    python main.py --candidate capture.json --library signs.json --config config/comparison.yaml
"""

import os
import sys

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from signmatch.cli import main


if __name__ == "__main__":
    sys.exit(main())
