"""
Pytest configuration.
Puts the project root and the tests directory on sys.path so test modules can
import the app packages and the shared helpers in test_fixtures.
"""

import sys
from pathlib import Path

tests_dir = Path(__file__).parent
project_root = tests_dir.parent

for path in (project_root, tests_dir):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
