#!/usr/bin/env python3
"""
PDFNinja - Entry point for python -m pdfninja

This module allows the package to be run as a module:
    python -m pdfninja
"""

import sys

from pdfninja.cli import main

if __name__ == "__main__":
    sys.exit(main())
