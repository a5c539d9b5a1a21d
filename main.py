#!/usr/bin/env python3
"""
Batch Renaming Tool - Main Entry

Usage:
    python main.py preview ./photos --format hyphenated
    python main.py process ./photos --dest ./out --number 1:3
    python main.py cleanup ./out
"""

import sys
from pathlib import Path

# Ensure the current directory is in the Python path
sys.path.insert(0, str(Path(__file__).parent))


def main():
    """Main entry point"""
    from cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
