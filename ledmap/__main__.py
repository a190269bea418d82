import sys

from ledmap.cli import main

sys.exit(main())
