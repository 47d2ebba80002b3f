"""
Session-scoped image registry.

Maps the content hash of a bitmap to the asset name it was stored
under, so an identical image is downloaded (~DG) once per job and only
recalled (^XG) afterwards.

Create one registry per label-building session. It is not thread-safe
and has no eviction; drop it together with the session.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from .image import MonoBitmap
from .parse import tokenize
from .tokens import Token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetRef:
    """A stored graphic and the hash of its bitmap data."""

    name: str  # e.g. "R:LOGO.GRF"
    content_hash: str  # sha256 hex of MonoBitmap.data


def content_hash(bitmap: MonoBitmap) -> str:
    """SHA-256 hex digest of the bitmap's packed bytes."""
    return hashlib.sha256(bitmap.data).hexdigest()


class ImageRegistry:
    """Content hash -> stored asset name."""

    def __init__(self):
        self._refs: dict[str, AssetRef] = {}

    def has(self, digest: str) -> bool:
        """Check whether content with this hash has been stored."""
        return digest in self._refs

    def get(self, digest: str) -> Optional[str]:
        """Get the asset name for a hash, or None if not stored."""
        ref = self._refs.get(digest)
        return ref.name if ref else None

    def put(self, digest: str, name: str) -> None:
        """Record that content with this hash was stored as name."""
        self._refs[digest] = AssetRef(name=name, content_hash=digest)
        logger.debug("Registered %s for %s", name, digest[:12])

    def refs(self) -> Iterator[AssetRef]:
        """Iterate over registered assets in insertion order."""
        return iter(self._refs.values())

    def recall_at(self, name: str, at: tuple[int, int]) -> list[Token]:
        """
        Build ^FO + ^XG + ^FS tokens placing a stored graphic.

        Args:
            name: Asset name used in the earlier ~DG
            at: (x, y) position in dots
        """
        x, y = at
        return tokenize(f"^FO{x},{y}^XG{name},1,1^FS")

    def __contains__(self, digest: str) -> bool:
        return self.has(digest)

    def __len__(self) -> int:
        return len(self._refs)
