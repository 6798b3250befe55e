import sys

from moviegraph.cli import main

sys.exit(main())
