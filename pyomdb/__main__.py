"""Allow ``python -m pyomdb``."""

import sys

from .cli.cli_main import main


if __name__ == "__main__":
    sys.exit(main())
