import sys

from tour_toolkit.cli import main

sys.exit(main())
