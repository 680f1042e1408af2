import os

# =====================================
# Global configuration for ScrimHub
# =====================================

# TEST_MODE:
# When True, testing features are enabled.
# Example uses:
#   - Verbose per-row logging while saving match results
TEST_MODE = os.getenv("SCRIMHUB_TEST_MODE", "false").lower() == "true"

# DEBUG turns on SQL echo and DEBUG-level logging.
DEBUG = os.getenv("SCRIMHUB_DEBUG", "false").lower() == "true"

# --- Database ---
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATABASE_PATH = os.getenv("SCRIMHUB_DATABASE_PATH", os.path.join(BASE_DIR, "scrimhub.db"))

# --- Logging ---
# When set, each logger also writes to a dated file inside this directory.
LOG_DIR = os.getenv("SCRIMHUB_LOG_DIR")
