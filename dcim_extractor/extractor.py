"""Run orchestration: primary media first, then edited renders."""

import logging
from typing import Any, Callable, Dict, Optional

from .config import Config, RunConfig
from .matcher import MutationMatcher, extractors_for
from .media_scanner import PrimaryMediaScanner
from .mutations import MutationScanner
from .transfer import TransferExecutor
from .utils import (
    ensure_directory,
    format_bytes,
    get_available_space,
    get_current_timestamp,
)

logger = logging.getLogger(__name__)


class DeviceExtractor:
    """Extracts photos and videos, plus edited renders, from a device mount."""

    def __init__(
        self,
        run_config: RunConfig,
        reporter: Optional[Callable[[str], None]] = None,
        config: Optional[Config] = None,
    ):
        """
        Initialize extractor.

        Args:
            run_config: Mount, target and mode for this run
            reporter: Receives dry-run operation lines (defaults to logging)
            config: Loaded configuration for suffix, extensions and safety
                settings. If None, built-in defaults apply.
        """
        self.run_config = run_config
        self.reporter = reporter
        self.config = config

    def run(self) -> Dict[str, Any]:
        """
        Run both scan phases in order, stopping at the first error.

        Returns:
            Dictionary with per-phase results and the transfer list
        """
        run_config = self.run_config.validated()
        mode = 'DRY RUN: ' if run_config.dry_run else ''
        logger.info(f"{mode}Extracting {run_config.mount} -> {run_config.target} ({run_config.mode})")

        suffix = self.config.get_media_dir_suffix() if self.config else 'APPLE'
        extractors = extractors_for(self.config.get_render_extensions()) if self.config else None

        if not run_config.dry_run:
            self._prepare_target(run_config.target)

        executor = TransferExecutor(run_config, self.reporter)
        primary = PrimaryMediaScanner(run_config, executor, media_dir_suffix=suffix)
        matcher = MutationMatcher(run_config.target, extractors, claimed=executor.destinations)
        mutations = MutationScanner(run_config, executor, matcher, media_dir_suffix=suffix)

        primary_results = primary.scan()
        mutation_results = mutations.scan()

        logger.info(
            f"{mode}Extraction complete: {primary_results['transferred']:,} media files, "
            f"{mutation_results['transferred']:,} edited renders"
        )
        return {
            'timestamp': get_current_timestamp(),
            'dry_run': run_config.dry_run,
            'mode': run_config.mode,
            'mount': run_config.mount,
            'target': run_config.target,
            'primary': primary_results,
            'mutations': mutation_results,
            'operations': executor.operations,
        }

    def _prepare_target(self, target: str) -> None:
        ensure_directory(target)
        min_free_gb = self.config.get_min_free_space_gb() if self.config else 0
        available = get_available_space(target)
        logger.info(f"Free space in {target}: {format_bytes(available)}")
        if available < min_free_gb * 1024 * 1024 * 1024:
            logger.warning(
                f"Less than {min_free_gb}GB free in {target} ({format_bytes(available)})"
            )
