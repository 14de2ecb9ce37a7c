"""Cache of loaded images, kept separately for flipped and unflipped loads."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Union
from pathlib import Path

from .utils import Image, read_image, read_image_hdr

PathLike = Union[str, Path]
Loader = Callable[[PathLike, bool], Image]


class ImageManager:
    """Loads each image at most once per flip setting.

    Plain and HDR loads share one cache, so whichever is asked for first
    for a path and flip setting is what later calls receive.
    """

    def __init__(self) -> None:
        self._images: Dict[str, List[Optional[Image]]] = {}

    def _fetch(self, path: PathLike, yflip: bool, loader: Loader) -> Image:
        slot = self._images.setdefault(str(path), [None, None])
        index = 1 if yflip else 0
        if slot[index] is None:
            slot[index] = loader(path, yflip)
        return slot[index]

    def get(self, path: PathLike, yflip: bool = True) -> Image:
        """8-bit image at ``path``; raises OSError when it cannot be read."""
        return self._fetch(path, yflip, read_image)

    def get_hdr(self, path: PathLike, yflip: bool = True) -> Image:
        """Floating-point image at ``path``; raises OSError when it cannot be read."""
        return self._fetch(path, yflip, read_image_hdr)

    def register(self, path: PathLike) -> None:
        """Reserve a cache entry for ``path`` without loading it."""
        self._images.setdefault(str(path), [None, None])

    def __contains__(self, path: object) -> bool:
        return str(path) in self._images