"""
Package entry point for python -m execution.

USAGE:
    python -m gantt_timeline encode            # Print visual model JSON
    python -m gantt_timeline summary LABEL     # Print one label's digest
    python -m gantt_timeline render -o out.png # Render chart to PNG
    python -m gantt_timeline dashboard         # Launch web dashboard
"""

import sys

from gantt_timeline.cli import main

if __name__ == "__main__":
    sys.exit(main())
