"""
File loading for train departure records.

Reading the file is kept apart from building the catalog: an unreadable
source is reported as ``None`` by ``read_records`` and turned into an empty
catalog by ``load_catalog``, so the application can still start.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..models.enums import RecordPolicy
from .catalog import TrainCatalog

logger = logging.getLogger(__name__)


def read_records(path: Union[str, Path], encoding: str = "utf-8-sig") -> Optional[List[str]]:
    """
    Read a departure file into a list of lines.

    Lines end only at ``\\n``, ``\\r`` or ``\\r\\n``; other Unicode line
    breaks stay inside the record. A leading byte order mark is dropped.

    Args:
        path: Path to the departure file
        encoding: Text encoding of the file

    Returns:
        Optional[List[str]]: One string per line, or None if the file could
        not be read
    """
    path = Path(path)

    try:
        with path.open("r", encoding=encoding) as handle:
            # Universal newline mode folds \r and \r\n into \n
            records = [line.rstrip("\n") for line in handle]
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read departure file {path}: {e}")
        return None

    logger.debug(f"Read {len(records)} lines from {path}")
    return records


def load_catalog(
    path: Union[str, Path],
    policy: RecordPolicy = RecordPolicy.SKIP
) -> TrainCatalog:
    """
    Load a catalog from a departure file.

    An unreadable file yields an empty catalog rather than an error.

    Args:
        path: Path to the departure file
        policy: What to do with records that fail to parse

    Returns:
        TrainCatalog: The loaded catalog

    Raises:
        ParseError: Under ``RecordPolicy.STRICT``, for the first bad record
    """
    records = read_records(path)

    if records is None:
        logger.info("Starting with an empty train catalog")
        return TrainCatalog()

    return TrainCatalog.load(records, policy)
