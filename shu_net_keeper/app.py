import logging
import sys
from pathlib import Path
from typing import List, Optional

from .daemon import ReAuthCoordinator
from .errors import ConfigError
from .logging_config import setup_logging
from .login import mask_value
from .notify import SmtpNotificationSink
from .settings import load_raw_config, validate_config

PROJECT_ROOT = Path.cwd()
CONFIG_PATH = PROJECT_ROOT / "config" / "settings.json"
LOG_DIR = PROJECT_ROOT / "logs"

logger = logging.getLogger("shu_net_keeper")


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    config_path = Path(args[0]).expanduser() if args else CONFIG_PATH

    try:
        raw = load_raw_config(config_path)
    except ConfigError as exc:
        print(f"Failed to load config: {exc}", file=sys.stderr)
        return 2

    log_level = raw.get("log_level", "INFO") if isinstance(raw, dict) else "INFO"
    log_path = setup_logging(LOG_DIR, log_level=log_level)
    logger.info("========== SHU net keeper starting ==========")
    logger.info("Log file: %s", log_path)

    try:
        config = validate_config(raw)
    except ConfigError as exc:
        logger.error("Invalid config %s: %s", config_path, exc)
        return 2

    logger.info("Config loaded user=%s interval=%ss", mask_value(config.username), config.interval)

    sink = SmtpNotificationSink.from_config(config.smtp) if config.smtp else None
    coordinator = ReAuthCoordinator(config, sink=sink)
    try:
        coordinator.run_forever()
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
    return 0
