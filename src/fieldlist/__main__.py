import sys

from fieldlist.cli import main

sys.exit(main())
