"""Root conftest — shared test configuration."""

import os

# Keep tests independent of any developer .env overrides
os.environ.setdefault("RULIAD_LOG_FORMAT", "text")
os.environ.setdefault("RULIAD_CACHE_MAX_SIZE", "100")
