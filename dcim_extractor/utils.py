"""Utility functions for device media extraction."""

import os
import psutil
from datetime import datetime
from pathlib import Path
from typing import List
import logging

from .errors import TraversalError

logger = logging.getLogger(__name__)


def format_bytes(bytes_value: int) -> str:
    """
    Format bytes as human-readable string.

    Args:
        bytes_value: Size in bytes

    Returns:
        Formatted string like "1.2GB"
    """
    if bytes_value == 0:
        return "0B"

    units = ['B', 'KB', 'MB', 'GB', 'TB']
    unit_index = 0
    size = float(bytes_value)

    while size >= 1024.0 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1

    return f"{size:.1f}{units[unit_index]}"


def get_available_space(path: Path) -> int:
    """
    Get available disk space for a path in bytes.

    Args:
        path: Path to check

    Returns:
        Available space in bytes
    """
    try:
        usage = psutil.disk_usage(str(path))
        return usage.free
    except OSError as e:
        logger.error(f"Failed to get disk space for {path}: {e}")
        return 0


def ensure_directory(path: Path) -> bool:
    """
    Ensure directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure

    Returns:
        True if directory exists or was created successfully
    """
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        logger.error(f"Failed to create directory {path}: {e}")
        return False


def is_occupied(path: str) -> bool:
    """Whether anything, including a dangling symlink, exists at path."""
    try:
        os.lstat(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise TraversalError(path, e) from e
    return True


def list_subdirectories(directory: str) -> List[str]:
    """
    List immediate subdirectory names of a directory, sorted.

    Raises:
        TraversalError: if the directory cannot be read
    """
    try:
        with os.scandir(directory) as entries:
            return sorted(entry.name for entry in entries if entry.is_dir())
    except OSError as e:
        raise TraversalError(directory, e) from e


def get_current_timestamp():
    """Get current timestamp as ISO string."""
    return datetime.now().isoformat()
