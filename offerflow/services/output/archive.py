"""Bundle generated documents into a single ZIP archive."""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Iterable

from offerflow_io.utils.log import get_logger

logger = get_logger("archive")


def bundle_archive(paths: Iterable[Path], zip_path: Path) -> Path:
    """Write every file in ``paths`` into ``zip_path`` under its base name."""

    zip_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in dict.fromkeys(paths):
            archive.write(path, arcname=path.name)
            count += 1
    logger.info("Archive written", extra={"output": str(zip_path), "files": count})
    return zip_path
