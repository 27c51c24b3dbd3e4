"""CLI entry point for fizzy-md.

Enables invocation via `python -m fizzy_md`, behaving exactly like the
`fizzy-md` console script.
"""

import sys

from fizzy_md.cli.app import main

if __name__ == "__main__":
    sys.exit(main())
