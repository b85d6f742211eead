"""Shared utilities for waitgen."""

import contextlib
import os
from pathlib import Path


def temp_path_for(filepath: Path) -> Path:
    """Return the process-specific temp path used while writing *filepath*."""
    return filepath.with_name(f"{filepath.name}.tmp{os.getpid()}")


def atomic_write_text(filepath: Path, text: str, encoding: str = "utf-8") -> None:
    """Write text to a file atomically so readers never see a partial file.

    The temp name carries the PID, so parallel invocations writing the same
    output directory do not clobber each other's temp files.
    """
    tmp_path = temp_path_for(filepath)
    try:
        tmp_path.write_text(text, encoding=encoding, newline="\n")
        os.replace(tmp_path, filepath)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise


def write_outputs(outdir: Path, outputs: dict[str, str]) -> list[Path]:
    """Atomically write each ``{filename: text}`` entry into *outdir*.

    Callers render every artifact before calling this, so a rendering error
    never leaves a subset of the outputs behind.
    """
    written: list[Path] = []
    for name, text in outputs.items():
        path = outdir / name
        atomic_write_text(path, text)
        written.append(path)
    return written
