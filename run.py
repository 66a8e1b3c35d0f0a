#!/usr/bin/env python3
"""Total — peer-to-peer chat bootstrap.

Usage:
    python run.py                        # uses ~/.total
    python run.py --data-dir ./alice     # second node on the same machine
    python run.py -v                     # show informational logs

On first run you are asked for a username; the identity is saved to
<data-dir>/config.json and the node listens on TCP port 4040.
"""

import sys

from total.cli import main

if __name__ == "__main__":
    sys.exit(main())
