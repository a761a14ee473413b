"""Non-clobbering copy/move of extracted files."""

import logging
import os
import shutil
from dataclasses import dataclass
from typing import Callable, List, Optional, Set

from .config import RunConfig
from .errors import TransferFailed

logger = logging.getLogger(__name__)


@dataclass
class TransferRecord:
    """One copy or move, either performed or only reported in dry-run."""
    mode: str
    source: str
    destination: str
    performed: bool = False

    @property
    def command(self) -> str:
        return f"{self.mode} --no-clobber {self.source} {self.destination}"


class TransferExecutor:
    """Copies or moves files without ever overwriting the destination.

    In dry-run mode each operation is only announced through ``reporter``;
    in live mode a destination that already exists raises ``TransferFailed``.
    """

    def __init__(self, run_config: RunConfig, reporter: Optional[Callable[[str], None]] = None):
        self.run_config = run_config
        self.reporter = reporter or logger.info
        self.operations: List[TransferRecord] = []
        self.destinations: Set[str] = set()

    def transfer(self, source: str, destination: str) -> TransferRecord:
        record = TransferRecord(self.run_config.mode, str(source), str(destination))

        if self.run_config.dry_run:
            self.reporter(record.command)
            self.operations.append(record)
            self.destinations.add(record.destination)
            return record

        logger.debug(record.command)
        if self.run_config.delete:
            self._move(record.source, record.destination)
        else:
            self._copy(record.source, record.destination)

        record.performed = True
        self.operations.append(record)
        self.destinations.add(record.destination)
        return record

    def _copy(self, source: str, destination: str) -> None:
        try:
            dst = open(destination, 'xb')
        except FileExistsError as e:
            raise TransferFailed(source, destination, f"not replacing {destination!r}") from e
        except OSError as e:
            raise TransferFailed(source, destination, str(e)) from e

        try:
            with dst, open(source, 'rb') as src:
                shutil.copyfileobj(src, dst)
            shutil.copystat(source, destination)
        except OSError as e:
            self._remove_partial(destination)
            raise TransferFailed(source, destination, str(e)) from e

    def _move(self, source: str, destination: str) -> None:
        try:
            os.link(source, destination)
        except FileExistsError as e:
            raise TransferFailed(source, destination, f"not replacing {destination!r}") from e
        except OSError as e:
            # Cross-device or no hard link support on the mount
            logger.debug(f"Hard link failed for {source} ({e}), copying instead")
            self._copy(source, destination)

        try:
            os.unlink(source)
        except OSError as e:
            raise TransferFailed(source, destination, f"copied but could not remove source: {e}") from e

    @staticmethod
    def _remove_partial(destination: str) -> None:
        try:
            os.unlink(destination)
        except OSError as e:
            logger.warning(f"Could not remove partial file {destination}: {e}")
