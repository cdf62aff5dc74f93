import sys

from smarttext.cli import main

sys.exit(main())
