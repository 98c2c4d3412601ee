import sys

from dochistory_toolkit.cli import main

sys.exit(main())
