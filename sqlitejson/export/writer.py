"""Persist exported JSON to the local filesystem."""

from pathlib import Path

import aiofiles

from sqlitejson.exceptions import ExportIOError
from sqlitejson.logging_config import get_logger

logger = get_logger(__name__)


async def export_to_file(json_text: str, destination: str | Path) -> Path:
    """
    Write an exported JSON string to ``destination``.

    Existing files are overwritten. Parent directories are not created, and a
    failed write may leave a partial file behind.

    Args:
        json_text: Serialized export
        destination: Target file path

    Returns:
        Path that was written

    Raises:
        ExportIOError: If the file cannot be written
    """
    path = Path(destination)

    try:
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(json_text)
    except OSError as e:
        raise ExportIOError(str(path), e.strerror or str(e)) from e

    logger.debug("Export written", path=str(path), size=len(json_text))
    return path
