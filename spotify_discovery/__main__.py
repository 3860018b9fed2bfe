import sys

from spotify_discovery.cli import main

sys.exit(main())
