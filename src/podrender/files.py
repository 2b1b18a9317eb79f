"""Reading Pod sources and writing rendered output.

Both helpers use UTF-8 and let ``OSError`` propagate; the CLI maps it to
its own exit code.
"""

from __future__ import annotations

from pathlib import Path

from podrender.utils.logger import get_logger

logger = get_logger(__name__)


def read_source(path: str | Path) -> str:
    """Read a Pod source file as UTF-8 text, dropping a leading byte order mark.

    Raises:
        OSError: If the file cannot be read (UnicodeDecodeError is reported
            as an OSError too, since the file is unusable either way)
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8-sig") as f:
            source = f.read()
    except UnicodeDecodeError as e:
        raise OSError(f"{path}: not valid UTF-8 ({e.reason} at byte {e.start})") from e
    logger.debug("Read %d characters from %s", len(source), path)
    return source


def write_output(path: str | Path, text: str) -> None:
    """Write rendered output as UTF-8, creating parent directories.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(text)
    logger.debug("Wrote %d characters to %s", len(text), path)
