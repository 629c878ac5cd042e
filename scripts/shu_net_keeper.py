#!/usr/bin/env python3
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
CONFIG_PATH = PROJECT_ROOT / "config" / "settings.json"

from shu_net_keeper import app  # noqa: E402

app.LOG_DIR = PROJECT_ROOT / "logs"

if __name__ == "__main__":
    raise SystemExit(app.main(sys.argv[1:] or [str(CONFIG_PATH)]))
