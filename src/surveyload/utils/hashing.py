"""
Content hashing for survey data files.

Digests identify a dataset file independently of its name or location.
"""

import hashlib
from pathlib import Path

from surveyload.utils.logging import get_logger

log = get_logger(__name__)


def file_md5_hash(path: str | Path, chunk_size: int = 8192) -> str:
    """
    Compute the MD5 digest of a file's contents.

    Args:
        path: Path to file.
        chunk_size: Chunk size for reading.

    Returns:
        32-character lowercase hex digest.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    p = Path(path)
    hasher = hashlib.md5()

    with p.open("rb") as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)

    digest = hasher.hexdigest()
    log.debug("Hashed file", path=str(p), digest=digest)
    return digest
