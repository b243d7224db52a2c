"""Line-editing writer wrapping a binary sink."""
import logging
from typing import Any

from .editor import Action, Editor, apply_editors
from .prefix_trie import PrefixTrie

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

_NEWLINE = b"\n"
_CR = b"\r"
_CRLF = b"\r\n"


class ShortWriteError(OSError):
    """Raised when a sink reports writing fewer bytes than it was given."""


class Writer:
    """Writer that edits data line by line before passing it to a sink.

    Bytes are buffered until a ``\\n`` completes a line. Each line is run
    through the editors whose prefix it starts with, in registration order,
    and written to the sink with its original ``\\n`` or ``\\r\\n`` ending
    unless an editor removed it. A trailing partial line stays buffered until
    more data arrives or ``flush`` is called.

    The sink is any object with a ``write(bytes)`` method, such as a file
    opened in binary mode or ``io.BytesIO``. Exceptions raised by the sink
    propagate unchanged.

    Lines are decoded with ``encoding`` and the ``surrogateescape`` error
    handler, so undecodable bytes survive the round trip.

    Not safe for concurrent use.
    """

    def __init__(self, sink: Any, *editors: Editor, encoding: str = DEFAULT_ENCODING):
        """Initialize writer.

        Args:
            sink: Binary destination with a ``write`` method
            *editors: Editors applied to each line, in order
            encoding: Codec used to turn raw lines into text for the editors
        """
        self.sink = sink
        self.encoding = encoding
        self._trie = PrefixTrie.build(editors)
        self._buf = bytearray()
        # Bytes at the head of _buf already known to hold no newline.
        self._scanned = 0

        logger.debug(f"Built prefix trie for {len(self._trie)} editors")

    @property
    def buffered(self) -> bytes:
        """Bytes accepted but not yet edited, normally a partial line."""
        return bytes(self._buf)

    def write(self, data: bytes) -> int:
        """Edit complete lines in ``data`` and write them to the sink.

        Args:
            data: Raw bytes, possibly ending in a partial line

        Returns:
            Number of bytes accepted, always ``len(data)``
        """
        buf = self._buf
        buf += data

        start = 0
        try:
            while True:
                end = buf.find(_NEWLINE, max(start, self._scanned))
                if end < 0:
                    self._scanned = len(buf)
                    break

                raw = bytes(buf[start:end])
                start = end + 1
                self._scanned = start

                ending = _NEWLINE
                if raw.endswith(_CR):
                    raw = raw[:-1]
                    ending = _CRLF

                self._emit(raw, ending)
        finally:
            del buf[:start]
            self._scanned -= start

        return len(data)

    def flush(self) -> None:
        """Edit and write the pending partial line, if any.

        The line is written without a line ending. Does nothing when no data
        is buffered.
        """
        if not self._buf:
            return

        raw = bytes(self._buf)
        self._buf.clear()
        self._scanned = 0
        self._emit(raw, b"")

    def edit_line(self, line: str) -> tuple[str, Action]:
        """Run ``line`` through the editors that may apply to it."""
        return apply_editors(self._trie.get(line), line)

    def _emit(self, raw: bytes, ending: bytes) -> None:
        line = raw.decode(self.encoding, "surrogateescape")
        result, action = self.edit_line(line)
        if action is Action.REMOVE:
            return

        out = result.encode(self.encoding, "surrogateescape") + ending
        try:
            n = self.sink.write(out)
        except Exception as e:
            logger.error(f"Sink write failed: {e}")
            raise

        if n is not None and n < len(out):
            logger.error(f"Sink accepted {n} of {len(out)} bytes")
            raise ShortWriteError(f"short write: {n} of {len(out)} bytes")
