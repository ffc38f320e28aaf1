"""Allow ``python -m licensechain``."""

import sys

from licensechain.cli import main

sys.exit(main())
