import sys

from neurips_scraper.cli import main

sys.exit(main())
