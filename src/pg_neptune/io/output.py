from __future__ import annotations

import os
import shutil
import time
from typing import Iterable, Optional

from pg_neptune.io.formatting import format_record, format_token
from pg_neptune.utils.paths import ensure_dir


def create_output_directory(root: str) -> str:
    """
    Create a fresh, timestamped folder for one conversion run.

    Args:
        root (str): Parent directory (created if missing).

    Returns:
        str: Path of the new run directory.
    """
    ensure_dir(root)
    stamp = int(time.time() * 1000)
    path = os.path.join(root, str(stamp))
    while os.path.exists(path):
        stamp += 1
        path = os.path.join(root, str(stamp))
    ensure_dir(path)
    return path


class OutputFile:
    """
    Neptune CSV file whose header is only known after the last row.

    Body rows are streamed to a temporary file as they are produced. When
    `print_headers()` is called the final `<name>.csv` is assembled as the
    header line followed by the buffered body.
    """

    def __init__(self, directory: str, name: str):
        self.path = os.path.join(directory, f"{name}.csv")
        self._body_path = os.path.join(directory, f".{name}.body.tmp")
        self._body = open(self._body_path, "w", encoding="utf-8", newline="")
        self.record_count = 0

    def print_record(self, fields: Optional[Iterable[str]]) -> bool:
        """Write one row; a `None` row is a skipped record and writes nothing."""
        if fields is None:
            return False
        self._body.write(format_record(fields))
        self._body.write("\n")
        self.record_count += 1
        return True

    def print_headers(self, headers: Iterable[str]) -> None:
        self._body.close()
        with open(self.path, "w", encoding="utf-8", newline="") as out:
            out.write(format_record(format_token(h) for h in headers))
            out.write("\n")
            with open(self._body_path, "r", encoding="utf-8", newline="") as body:
                shutil.copyfileobj(body, out)
        os.remove(self._body_path)

    def close(self) -> None:
        if not self._body.closed:
            self._body.close()
        if os.path.exists(self._body_path):
            os.remove(self._body_path)

    def __enter__(self) -> "OutputFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
