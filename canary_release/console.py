"""Console output helpers.

Workflows report progress on stdout so it shows up in CI logs; detail lines
under a step are indented by two spaces.
"""

from __future__ import annotations

import sys
from typing import NoReturn


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of a release workflow in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def detail(msg: str) -> None:
    """Print an indented line under the current step."""
    print(f"  {msg}")


def fatal(msg: str) -> NoReturn:
    """Print an error message and exit with code 1.

    Use for unrecoverable setup errors such as missing credentials.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
