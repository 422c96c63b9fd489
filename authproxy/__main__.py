import sys

from authproxy.cli import main

sys.exit(main())
