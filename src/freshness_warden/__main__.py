import sys

from freshness_warden.cli import main

sys.exit(main())
