import sys

from names_dict.cli import main


sys.exit(main())
