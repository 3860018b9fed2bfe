import json
import os
from pathlib import Path
import tempfile
from typing import Any


def ensure_parent_dir(path: Path | str) -> None:
    """
    Create the parent directory of `path` if it is missing.
    """
    directory = os.path.dirname(os.fspath(path))
    if directory:
        os.makedirs(directory, exist_ok=True)


def write_json(path: str | Path, data: Any) -> Path:
    """
    Write a JSON export (e.g. a discovery result) with an atomic replace.

    The document goes to a temp file next to the target, is fsynced, then
    moved over the target with os.replace: readers see either the old file
    or the complete new one. Returns the target path.
    """
    target_path = Path(path)
    ensure_parent_dir(target_path)

    fd, tmp_path_str = tempfile.mkstemp(
        dir=str(target_path.parent),
        prefix=target_path.name,
        suffix=".tmp",
    )
    tmp_path = Path(tmp_path_str)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, target_path)
    except Exception:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise

    return target_path
