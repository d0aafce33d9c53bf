"""Run the server with ``python -m hello_server``."""

import sys

from hello_server.server import main

sys.exit(main())
