from __future__ import annotations

import json
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


LOG_PATH = Path(os.getenv("BUILD_LOG_PATH", "build.log"))


def new_run_id(prefix: str) -> str:
    return f"{prefix}-{datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%S')}-{uuid.uuid4().hex[:6]}"


def log_event(run_id: str, event: str, data: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Append a structured build event as one JSON line.
    """
    target = path or LOG_PATH
    try:
        record = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "run_id": run_id,
            "event": event,
            "data": data,
        }
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
    except Exception:
        # Diagnostics only; never fails the build.
        return
