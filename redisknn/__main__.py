import sys

from .core.demo import main

sys.exit(main())
