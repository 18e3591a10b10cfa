# Test configuration
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

# Keep test runs from writing log files into the working tree
os.environ.setdefault("LOG_TO_FILES", "false")
