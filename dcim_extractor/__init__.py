"""
DCIM Extraction Tool

Copies or moves photos and videos off an iOS device mount into one folder,
recovering edited renders from the PhotoData mutations tree along the way.
"""

__version__ = "1.0.0"
__author__ = "Homelab Team"

from .config import Config, RunConfig
from .errors import ConfigurationError, ExtractionError, TransferFailed, TraversalError
from .transfer import TransferExecutor, TransferRecord
from .media_scanner import PrimaryMediaScanner
from .matcher import MutationMatcher, RenderedCandidate, RenderExtractor
from .mutations import MutationScanner
from .extractor import DeviceExtractor
from .reporter import ExtractionReporter

__all__ = [
    'Config',
    'RunConfig',
    'ConfigurationError',
    'ExtractionError',
    'TransferFailed',
    'TraversalError',
    'TransferExecutor',
    'TransferRecord',
    'PrimaryMediaScanner',
    'MutationMatcher',
    'RenderedCandidate',
    'RenderExtractor',
    'MutationScanner',
    'DeviceExtractor',
    'ExtractionReporter',
]
