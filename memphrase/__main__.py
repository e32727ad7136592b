"""Allow ``python -m memphrase``."""

import sys

from memphrase.cli import main

if __name__ == '__main__':
    sys.exit(main())
