"""Matching edited-asset folders to their rendered output."""

import logging
import os
from dataclasses import dataclass
from typing import Collection, List, Optional, Sequence

from .errors import TraversalError
from .utils import is_occupied

logger = logging.getLogger(__name__)

RENDER_NAME = 'FullSizeRender'
ADJUSTMENTS_DIR = 'Adjustments'


@dataclass
class RenderedCandidate:
    """A render found in an asset folder and the free name it will get."""
    source: str
    destination: str
    extension: str


@dataclass(frozen=True)
class RenderExtractor:
    """Looks for one kind of render (photo or video) by extension."""
    kind: str
    extension: str


PHOTO = RenderExtractor('photo', 'jpg')
VIDEO = RenderExtractor('video', 'mov')
DEFAULT_EXTRACTORS = (PHOTO, VIDEO)


def extractors_for(extensions: Sequence[str]) -> List[RenderExtractor]:
    """Build an ordered extractor list from configured extensions."""
    known = {e.extension: e for e in DEFAULT_EXTRACTORS}
    return [known.get(ext, RenderExtractor(ext, ext)) for ext in extensions]


class MutationMatcher:
    """Resolves the render of an asset folder to a collision-free destination.

    Collisions are resolved by name only: ``IMG_1.JPG`` becomes
    ``IMG_1-v1.JPG``, then ``IMG_1-v2.JPG`` and so on. File contents are
    never compared, so two different edits with the same name both survive.
    """

    def __init__(
        self,
        target: str,
        extractors: Optional[Sequence[RenderExtractor]] = None,
        claimed: Collection[str] = (),
    ):
        self.target = target
        self.extractors = list(extractors) if extractors is not None else list(DEFAULT_EXTRACTORS)
        # Destinations already handed out in this run, which a dry-run never writes
        self.claimed = claimed

    def resolve(self, asset_folder: str, extension: str) -> Optional[RenderedCandidate]:
        """Return the candidate for one extension, or None if there is no render."""
        source = os.path.join(asset_folder, ADJUSTMENTS_DIR, f"{RENDER_NAME}.{extension}")
        try:
            os.stat(source)
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as e:
            raise TraversalError(source, e) from e

        name = os.path.basename(os.path.normpath(asset_folder))
        ext = extension.upper()
        destination = os.path.join(self.target, f"{name}.{ext}")
        version = 0
        while destination in self.claimed or is_occupied(destination):
            # TODO: compare contents and reuse the existing file when identical
            version += 1
            destination = os.path.join(self.target, f"{name}-v{version}.{ext}")

        if version:
            logger.debug(f"{name}.{ext} already exists, using {os.path.basename(destination)}")
        return RenderedCandidate(source=source, destination=destination, extension=extension)

    def match(self, asset_folder: str) -> Optional[RenderedCandidate]:
        """Try each extractor in priority order and stop at the first render."""
        for extractor in self.extractors:
            candidate = self.resolve(asset_folder, extractor.extension)
            if candidate is not None:
                return candidate
        return None
