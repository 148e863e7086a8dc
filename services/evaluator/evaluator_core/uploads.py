from __future__ import annotations

import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from libs.core import logging as core_logging

LOGGER = core_logging.get_logger("evaluator")


@contextmanager
def stored_upload(stream: BinaryIO, upload_dir: Path) -> Iterator[Path]:
    """Spool an uploaded stream to a temporary file for the length of the block.

    The file is removed when the block exits, whether it returns or raises.
    """
    upload_dir.mkdir(parents=True, exist_ok=True)
    fd, raw_path = tempfile.mkstemp(dir=upload_dir, prefix="upload-")
    path = Path(raw_path)
    try:
        with os.fdopen(fd, "wb") as handle:
            shutil.copyfileobj(stream, handle)
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        LOGGER.info("upload_removed", path=path.name)
