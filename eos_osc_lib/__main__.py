"""
Eos OSC Library - Entry point

Run with: python -m eos_osc_lib
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
