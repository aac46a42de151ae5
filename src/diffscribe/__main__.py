"""Allow ``python -m diffscribe``."""

import sys

from diffscribe.cli import main

if __name__ == "__main__":
	sys.exit(main())
