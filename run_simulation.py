#!/usr/bin/env python3
"""
Runner script for the emergency response simulation.
"""

import sys

from response_sim.cli import main


if __name__ == "__main__":
    sys.exit(main())
