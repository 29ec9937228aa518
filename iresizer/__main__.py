import sys

from .adapters.cli_argparse import main

sys.exit(main())
