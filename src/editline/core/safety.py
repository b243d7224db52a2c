"""Locked, atomic rewrites of files on disk."""
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional, Union

from filelock import FileLock

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 30


class FileRewrite:
    """Context manager that swaps in new content for a file.

    While the block runs, ``<file>.lock`` is held and new content is written
    to ``output``, a binary temporary file beside the target. On a clean exit
    the temporary file takes the target's permission bits and atomically
    replaces it. If the block raises, the target is never touched and the
    temporary file is discarded.
    """

    def __init__(self, file_path: Union[str, Path], timeout: float = DEFAULT_LOCK_TIMEOUT):
        """Initialize file rewrite.

        Args:
            file_path: File whose content will be replaced
            timeout: Lock timeout in seconds
        """
        self.file_path = Path(file_path)
        self.lock = FileLock(f"{self.file_path}.lock", timeout=timeout)
        self.temp_path: Optional[Path] = None
        self.output: Optional[BinaryIO] = None

    def __enter__(self) -> "FileRewrite":
        self.lock.acquire()
        logger.info(f"Acquired lock for {self.file_path}")

        try:
            fd, name = tempfile.mkstemp(
                dir=self.file_path.parent,
                prefix=f".{self.file_path.name}.",
                suffix=".tmp",
            )
        except OSError:
            self.lock.release()
            raise

        self.temp_path = Path(name)
        self.output = os.fdopen(fd, "wb")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            self.output.close()
            if exc_type is None:
                self._commit()
            else:
                logger.error(f"Rewrite of {self.file_path} abandoned: {exc_val}")
        finally:
            if self.temp_path.exists():
                os.remove(self.temp_path)
            self.lock.release()
            logger.info(f"Released lock for {self.file_path}")

    def _commit(self) -> None:
        # mkstemp creates 0600 files
        if self.file_path.exists():
            shutil.copymode(self.file_path, self.temp_path)

        os.replace(self.temp_path, self.file_path)
        logger.info(f"Atomically replaced {self.file_path}")
