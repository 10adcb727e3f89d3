"""botdouble CLI entry point.

This module enables running botdouble as:
    python -m botdouble <command>
"""

from botdouble.cli import main

if __name__ == "__main__":
    main()
