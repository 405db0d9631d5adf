import sys

from fsk.cli import main

sys.exit(main())
