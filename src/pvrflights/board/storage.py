"""Read and write the published snapshot file."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from pvrflights.board.models import Snapshot

logger = logging.getLogger(__name__)


def write_snapshot(snapshot: Snapshot, path: Union[str, Path]) -> Path:
    """Write snapshot as pretty-printed UTF-8 JSON, replacing the file atomically."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info(
        "Wrote %d arrivals, %d departures to %s",
        len(snapshot.arrivals),
        len(snapshot.departures),
        path,
    )
    return path


def read_snapshot(path: Union[str, Path]) -> dict:
    """Load a published snapshot as plain JSON data."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)
