import sys

from wordbox.cli import main

sys.exit(main())
