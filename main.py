#!/usr/bin/env python3
"""
Main entry point for tokenguard
"""

import sys

from tokenguard.main import main

if __name__ == "__main__":
    sys.exit(main())
