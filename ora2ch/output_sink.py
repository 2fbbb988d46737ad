import os

import structlog

from ora2ch.errors import OutputWriteError

logger = structlog.get_logger(__name__)


def save_ddl(path, ddl):
    """Append ``ddl`` to ``path`` (created if missing) and sync it to disk.

    If writing or syncing fails the file is cut back to its previous size so
    no partial block is left behind.
    """
    data = memoryview(ddl.encode("utf-8"))
    try:
        f = open(path, "ab", buffering=0)
    except OSError as e:
        raise OutputWriteError(f"Couldn't open {path} for writing: {e}") from e

    with f:
        start = f.seek(0, os.SEEK_END)
        try:
            while data:
                data = data[f.write(data):]
            os.fsync(f.fileno())
        except OSError as e:
            try:
                f.truncate(start)
            except OSError:
                logger.error("ddl_rollback_failed", path=path, offset=start)
            raise OutputWriteError(f"Couldn't write DDL to {path}: {e}") from e

    logger.info("ddl_saved", path=path, bytes=len(ddl.encode("utf-8")))
