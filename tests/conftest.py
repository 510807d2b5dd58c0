import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is on sys.path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Never touch the real ~/.timesheet, and ignore any developer .env
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("TIMESHEET_FILE", raising=False)
    monkeypatch.delenv("TIMESHEET_DAILY_QUOTA_HOURS", raising=False)
    monkeypatch.delenv("TIMESHEET_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
