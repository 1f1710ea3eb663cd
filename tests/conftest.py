from __future__ import annotations

import os

os.environ.pop("FBMARKETING_ACCESS_TOKEN", None)
