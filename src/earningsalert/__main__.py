import sys

from earningsalert.cli import main

sys.exit(main())
