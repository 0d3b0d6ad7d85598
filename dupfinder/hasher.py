"""
Streaming SHA256 content digest.

Files are read in fixed-size chunks so memory use does not depend on file
size. Errors are not caught here: callers decide how a failed read counts.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Union

DEFAULT_CHUNK_SIZE = 65536


def hash_file(file_path: Union[str, Path], chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Compute SHA256 hash (chunked for memory efficiency).

    Args:
        file_path: File to hash
        chunk_size: Bytes read per iteration

    Returns:
        Lowercase hex digest string

    Raises:
        OSError: File cannot be opened or a read fails mid-stream
    """
    sha256 = hashlib.sha256()

    with open(file_path, "rb") as f:
        while chunk := f.read(chunk_size):
            sha256.update(chunk)

    return sha256.hexdigest()
