from __future__ import annotations

import sys

from ptable_svg.app import main

sys.exit(main())
