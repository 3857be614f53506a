import sys

from altcha.cli import main

sys.exit(main())
