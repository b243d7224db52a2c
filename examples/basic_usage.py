#!/usr/bin/env python3
"""Basic usage examples for the editline library."""

import io
import os
import sys
import tempfile

from editline import (
    StreamEditor,
    Writer,
    prefix,
    regexp,
    remove,
    replace_literal,
    replace_regexp,
)


def scrub_editors():
    """Editors that drop debug noise and hide credentials."""
    return [
        prefix("DEBUG ", remove()),
        replace_regexp(r"(password|token|secret)=\S+", r"\1=***"),
        regexp(r"^Authorization: ", replace_literal("Authorization: <redacted>")),
    ]


def writer_example():
    """Demonstrate wrapping a sink with a Writer."""
    print("=== Writer Example ===")

    out = io.BytesIO()
    writer = Writer(out, *scrub_editors())

    # Data arrives in arbitrary pieces; lines are only edited once complete
    for piece in [b"DEBUG conn", b"ecting\nINFO login pass", b"word=hunter2\r\n", b"Authorization: Bearer abc"]:
        writer.write(piece)

    print(f"Before flush: {out.getvalue()!r}")
    writer.flush()
    print(f"After flush:  {out.getvalue()!r}")


def pipe_example():
    """Demonstrate filtering stdin to stdout."""
    print("\n=== Pipe Example ===")

    writer = Writer(sys.stdout.buffer, *scrub_editors())
    writer.write(b"INFO token=abc123 refreshed\nDEBUG tick\nINFO done\n")
    writer.flush()
    sys.stdout.flush()


def file_example():
    """Demonstrate rewriting a log file in place."""
    print("\n=== File Example ===")

    with tempfile.NamedTemporaryFile(mode="wb", suffix=".log", delete=False) as tmp:
        for i in range(1000):
            tmp.write(f"DEBUG step {i}\nINFO request {i} secret=s{i}\n".encode())
        tmp_path = tmp.name

    try:
        editor = StreamEditor(tmp_path, *scrub_editors())
        success = editor.edit_in_place()
        print(f"Rewrote file in place: {success}")

        first = next(editor.read_chunks())[:80]
        print(f"First bytes: {first!r}")

    finally:
        os.unlink(tmp_path)
        if os.path.exists(tmp_path + ".lock"):
            os.unlink(tmp_path + ".lock")


if __name__ == "__main__":
    writer_example()
    pipe_example()
    file_example()

    print("\n=== All examples completed successfully! ===")
