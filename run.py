#!/usr/bin/env python3
"""Run the quality gate check."""
import sys

from sonar_gate.main import main

if __name__ == "__main__":
    sys.exit(main())
