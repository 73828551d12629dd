"""
propcheck entry point.

Usage:
    python -m cli <filename>
"""

import sys
from .propcheck import main

if __name__ == "__main__":
    sys.exit(main())
