"""
Cached model discovery.

Lists the model artifacts sitting directly inside a directory. A single
unreadable entry is skipped rather than aborting the whole scan.
"""

import logging
import os
from typing import List

from .errors import DirectoryUnreadable

logger = logging.getLogger(__name__)

MODEL_SUFFIX = ".gguf"


def scan_cached_models(directory: str = ".", suffix: str = MODEL_SUFFIX) -> List[str]:
    """
    List model files in a directory (non-recursive).

    Args:
        directory: Directory to scan
        suffix: Case-sensitive filename suffix identifying a model artifact

    Returns:
        File names in directory-listing order (not sorted)

    Raises:
        DirectoryUnreadable: If the directory itself cannot be listed
    """
    try:
        entries = os.scandir(directory)
    except OSError as e:
        logger.error(f"Cannot list {directory}: {e}")
        raise DirectoryUnreadable(directory, e) from e

    models = []
    with entries:
        try:
            for entry in entries:
                if not entry.name.endswith(suffix):
                    continue
                try:
                    if not entry.is_file():
                        continue
                except OSError as e:
                    logger.debug(f"Skipping unreadable entry {entry.name}: {e}")
                    continue
                models.append(entry.name)
        except OSError as e:
            logger.error(f"Listing {directory} failed: {e}")
            raise DirectoryUnreadable(directory, e) from e

    logger.info(f"Found {len(models)} cached model(s) in {directory}")
    return models
