import json
from pathlib import Path

import pytest


def write_log(logs_dir: Path, rel: str, data) -> Path:
    """Write a log file under logs_dir; data may be a dict or raw text."""
    path = logs_dir / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def logs_dir(tmp_path: Path) -> Path:
    d = tmp_path / "content" / "logs"
    d.mkdir(parents=True)
    return d
