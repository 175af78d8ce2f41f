import sys

from blcalc.main import main

sys.exit(main())
