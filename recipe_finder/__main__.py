import sys

from recipe_finder.cli import main


sys.exit(main())
