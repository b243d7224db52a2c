"""Streaming helpers that run files and binary streams through a Writer."""
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from .editor import Editor
from .safety import DEFAULT_LOCK_TIMEOUT, FileRewrite
from .writer import DEFAULT_ENCODING, Writer

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192
DEFAULT_COPY_CHUNK_SIZE = 65536


class StreamEditor:
    """Apply line editors to a file without loading it into memory.

    The file is read in fixed-size chunks and fed to a Writer, so memory use
    is bounded by the chunk size plus the longest line.
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        *editors: Editor,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = DEFAULT_ENCODING,
    ):
        """Initialize streaming editor.

        Args:
            file_path: Path to the file to edit
            *editors: Editors applied to each line, in order
            chunk_size: Size of chunks to read (default 8KB)
            encoding: Codec used to decode lines for the editors
        """
        self.file_path = Path(file_path)
        self.editors = editors
        self.chunk_size = chunk_size
        self.encoding = encoding

    def read_chunks(self) -> Iterator[bytes]:
        """Read the file in binary chunks.

        Yields:
            Chunks of file content
        """
        with open(self.file_path, "rb") as f:
            while True:
                chunk = f.read(self.chunk_size)
                if not chunk:
                    break
                yield chunk

    def edit_to(self, sink: Any) -> int:
        """Write the edited file content to ``sink``.

        Args:
            sink: Binary destination with a ``write`` method

        Returns:
            Number of source bytes processed
        """
        writer = Writer(sink, *self.editors, encoding=self.encoding)
        total = 0
        for chunk in self.read_chunks():
            total += writer.write(chunk)
        writer.flush()
        return total

    def edit_to_path(self, output_path: Optional[Union[str, Path]] = None) -> Path:
        """Write an edited copy of the file.

        Args:
            output_path: Output file path (if None, uses ``<file>.tmp``, or
                ``<file>.edited`` when the file already ends in ``.tmp``)

        Returns:
            Path to output file

        Raises:
            ValueError: If the output path is the file being edited
        """
        if output_path is None:
            output_path = self.file_path.with_suffix(".tmp")
            if output_path == self.file_path:
                output_path = self.file_path.with_name(f"{self.file_path.name}.edited")

        output_path = Path(output_path)
        if output_path.resolve() == self.file_path.resolve():
            raise ValueError(f"Output path {output_path} is the file being edited; use edit_in_place")

        with open(output_path, "wb") as out:
            total = self.edit_to(out)

        logger.info(f"Edited {total} bytes from {self.file_path} into {output_path}")
        return output_path

    def edit_in_place(self, timeout: float = DEFAULT_LOCK_TIMEOUT) -> bool:
        """Rewrite the file through the editors under a lock.

        The file keeps its permission bits and is left untouched if anything
        fails.

        Args:
            timeout: Lock timeout in seconds

        Returns:
            True if the file was rewritten
        """
        try:
            with FileRewrite(self.file_path, timeout) as rewrite:
                self.edit_to(rewrite.output)
            return True

        except Exception as e:
            logger.error(f"In-place edit failed for {self.file_path}: {e}")
            return False


def stream_copy_with_editors(
    source: BinaryIO,
    dest: Any,
    *editors: Editor,
    chunk_size: int = DEFAULT_COPY_CHUNK_SIZE,
    encoding: str = DEFAULT_ENCODING,
) -> int:
    """Copy a binary stream through line editors.

    Args:
        source: Readable binary stream
        dest: Binary destination with a ``write`` method
        *editors: Editors applied to each line, in order
        chunk_size: Size of chunks to read
        encoding: Codec used to decode lines for the editors

    Returns:
        Number of source bytes consumed
    """
    writer = Writer(dest, *editors, encoding=encoding)
    total = 0
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            break
        total += writer.write(chunk)

    writer.flush()
    return total
