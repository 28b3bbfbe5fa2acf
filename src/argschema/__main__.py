import sys

from argschema.cli import main

sys.exit(main())
