#!/usr/bin/env python3
"""Generate a synthetic housing dataset and print its summary tables.

Usage:
    python scripts/generate_sample_data.py
    python scripts/generate_sample_data.py --count 10000 --seed 7 --export --output-dir local/
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from urban_insights.cli import main

if __name__ == "__main__":
    sys.exit(main())
