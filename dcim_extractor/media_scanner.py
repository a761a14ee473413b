"""Primary media scanning of the device DCIM tree."""

import logging
import os
from typing import Any, Dict, List

from .config import RunConfig
from .errors import TraversalError
from .transfer import TransferExecutor

logger = logging.getLogger(__name__)

DESCEND = 'descend'
PRUNE = 'prune'


def _raise_traversal_error(err: OSError) -> None:
    raise TraversalError(err.filename, err) from err


class PrimaryMediaScanner:
    """Transfers every file under the vendor's per-date DCIM folders."""

    def __init__(self, run_config: RunConfig, executor: TransferExecutor, media_dir_suffix: str = 'APPLE'):
        self.run_config = run_config
        self.executor = executor
        self.media_dir_suffix = media_dir_suffix
        self.root = os.path.join(run_config.mount, 'DCIM')

    def directory_decision(self, path: str) -> str:
        """Decide whether the walk enters a directory or prunes its subtree."""
        if path == self.root or os.path.basename(path).endswith(self.media_dir_suffix):
            return DESCEND
        return PRUNE

    def scan(self) -> Dict[str, Any]:
        """Walk {mount}/DCIM depth-first and transfer files from eligible folders.

        Returns dict with the transfer count and the pruned directories.
        """
        logger.info(f"Scanning primary media in {self.root}")
        transferred = 0
        skipped_dirs: List[str] = []

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=_raise_traversal_error):
            for name in sorted(filenames):
                source = os.path.join(dirpath, name)
                self.executor.transfer(source, os.path.join(self.run_config.target, name))
                transferred += 1

            descend = []
            for name in sorted(dirnames):
                path = os.path.join(dirpath, name)
                if self.directory_decision(path) == PRUNE:
                    logger.info(f"Skipping: {path}")
                    skipped_dirs.append(path)
                    continue
                descend.append(name)
            # os.walk only enters what is left in dirnames
            dirnames[:] = descend

        logger.info(f"Primary scan complete: {transferred:,} files, {len(skipped_dirs)} directories skipped")
        return {
            'transferred': transferred,
            'skipped_dirs': skipped_dirs,
        }
