"""Entry point for ``python -m cattle_loan``."""

import sys

from cattle_loan.main import main

sys.exit(main())
