import sys

from pbtfun.cli import main

sys.exit(main())
