from __future__ import annotations

from pathlib import Path

from infra.result import Result, err, ok


def read_log_file(path: str | Path) -> Result[str, str]:
    """Read the whole file as UTF-8 text. Every failure becomes an Err message."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as exc:
        return err(f"Error opening file {p}: {exc.strerror or exc}")

    try:
        return ok(data.decode("utf-8"))
    except UnicodeDecodeError as exc:
        return err(f"Error reading file {p}: {exc}")
