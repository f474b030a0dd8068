#!/usr/bin/env python3
"""
CLI: Generate a series of procedural PNG artworks.
Usage:
  python scripts/generate.py
  python scripts/generate.py wander 5
  python scripts/generate.py train 3 a1b2c3d --seed 42
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from genimg.cli import main

if __name__ == "__main__":
    sys.exit(main())
