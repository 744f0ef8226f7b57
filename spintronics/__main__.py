"""
Spintronics circuit builder — entry point.

Usage:
    python -m spintronics build netlist.json -o circuit.spin
    python -m spintronics inspect circuit.spin
    python -m spintronics serve --port 3000
"""

import sys

from spintronics.app import main


if __name__ == "__main__":
    sys.exit(main())
