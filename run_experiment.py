#!/usr/bin/env python3
"""
Write the ordered/random sample-size sweeps into the current directory.

Same as ``python -m stateprob.experiment``.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from stateprob.experiment import main  # noqa: E402

if __name__ == "__main__":
    main()
