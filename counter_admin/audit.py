"""Simple audit logging utilities."""
from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path
from typing import Any

from .config import settings
from .middleware.correlation import request_id_ctx

logger = logging.getLogger(__name__)


def log_file() -> Path:
    log_dir = Path(settings.logs_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "audit.log"


def log_action(action: str, counter: str | None = None, value: Any | None = None) -> None:
    """Append an audit log entry to ``<LOGS_DIR>/audit.log``.

    Parameters:
        action: Name of the action (reset)
        counter: Raw store name of the affected counter
        value: Counter value observed before the action
    """
    entry = {
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
        "action": action,
        "counter": counter,
        "value": value,
        "request_id": request_id_ctx.get(None),
    }
    try:
        with log_file().open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")
    except OSError as exc:
        # Auditing must not fail the request it describes
        logger.warning("Could not write audit entry %s: %s", action, exc)
