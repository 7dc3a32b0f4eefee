import sys

from ddl2struct.cli import main

sys.exit(main())
