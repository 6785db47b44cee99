import sys

from cannontree.driver import main

sys.exit(main())
