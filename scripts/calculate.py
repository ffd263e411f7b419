"""Run the salary tax calculator without installing the package.

Usage:
    python scripts/calculate.py --salary 36000 --type employed
    python scripts/calculate.py            # interactive session
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.cli import main

if __name__ == "__main__":
    sys.exit(main())
