"""Persist the viewer's last-used result file."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from log_config.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ViewerState:
    last_result_file: Optional[str] = None


def state_path(root: Optional[Path] = None) -> Path:
    base = root or Path("configs")
    return base / "app_state.json"


def load_state(root: Optional[Path] = None) -> ViewerState:
    path = state_path(root)
    if not path.exists():
        return ViewerState()
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring unreadable viewer state {path}: {e}")
        return ViewerState()
    if not isinstance(data, dict):
        return ViewerState()
    last = data.get("last_result_file")
    return ViewerState(last_result_file=last if isinstance(last, str) else None)


def save_state(state: ViewerState, root: Optional[Path] = None) -> None:
    path = state_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(state), indent=2))
