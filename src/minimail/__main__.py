import sys

from minimail.cli.cli import main

sys.exit(main())
