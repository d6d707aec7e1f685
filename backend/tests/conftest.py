import os
import sys
from pathlib import Path

import pytest

# Ensure backend root is on sys.path for `import community_site` and `import main`
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# The sweeper task is exercised directly; keep it out of app startup in tests
os.environ.setdefault("CACHE_SWEEPER_ENABLED", "0")


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
