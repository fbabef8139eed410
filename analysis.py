from __future__ import annotations

import sys

from reskilling.main import run


if __name__ == "__main__":
    sys.exit(run())
