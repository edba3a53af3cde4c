import sys

from egos.cli import main

sys.exit(main())
