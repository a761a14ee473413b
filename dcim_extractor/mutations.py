"""Recovery of edited renders from the PhotoData mutations tree."""

import logging
import os
from typing import Any, Dict, Optional

from .config import RunConfig
from .matcher import MutationMatcher
from .transfer import TransferExecutor
from .utils import list_subdirectories

logger = logging.getLogger(__name__)

MUTATIONS_DCIM = os.path.join('PhotoData', 'Mutations', 'DCIM')


class MutationScanner:
    """Walks {mount}/PhotoData/Mutations/DCIM/*APPLE/<asset> folders."""

    def __init__(
        self,
        run_config: RunConfig,
        executor: TransferExecutor,
        matcher: Optional[MutationMatcher] = None,
        media_dir_suffix: str = 'APPLE',
    ):
        self.run_config = run_config
        self.executor = executor
        self.matcher = matcher or MutationMatcher(run_config.target, claimed=executor.destinations)
        self.media_dir_suffix = media_dir_suffix
        self.root = os.path.join(run_config.mount, MUTATIONS_DCIM)

    def scan(self) -> Dict[str, Any]:
        """Transfer the render of every asset folder that has one."""
        logger.info(f"Scanning mutations in {self.root}")
        transferred = 0
        without_render = 0

        for name in list_subdirectories(self.root):
            if not name.endswith(self.media_dir_suffix):
                continue
            media_dir = os.path.join(self.root, name)
            for asset in list_subdirectories(media_dir):
                asset_folder = os.path.join(media_dir, asset)
                candidate = self.matcher.match(asset_folder)
                if candidate is None:
                    logger.debug(f"No render in {asset_folder}")
                    without_render += 1
                    continue
                self.executor.transfer(candidate.source, candidate.destination)
                transferred += 1

        logger.info(f"Mutation scan complete: {transferred:,} renders, {without_render:,} folders without render")
        return {
            'transferred': transferred,
            'assets_without_render': without_render,
        }
