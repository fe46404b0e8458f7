"""Raster abstraction and image loading utilities."""

import logging
import operator
from pathlib import Path
from typing import Iterable, List, Protocol, Tuple, Union, runtime_checkable

import cv2
import numpy as np
from PIL import Image

from ..core.exceptions import ImageLoadError, InvalidArgumentError, NullOrEmptyInputError, OutOfBoundsError

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("opencv", "pillow")


@runtime_checkable
class Raster(Protocol):
    """Anything exposing a pixel grid of integer color vectors."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int) -> Tuple[int, ...]: ...


class ArrayRaster:
    """Raster backed by a numpy array of shape (H, W) or (H, W, C)."""

    __slots__ = ("_array",)

    def __init__(self, array: np.ndarray):
        if array is None:
            raise NullOrEmptyInputError("Image array is None.")
        arr = np.asarray(array)
        if arr.dtype.kind not in "biu":
            raise InvalidArgumentError(
                f"Image array must hold integer color components, got dtype {arr.dtype}.")
        if arr.ndim == 2:
            arr = arr[:, :, np.newaxis]
        if arr.ndim != 3:
            raise InvalidArgumentError(
                f"Image array must have shape (H, W) or (H, W, C), got {arr.shape}.")
        if arr.size == 0:
            raise NullOrEmptyInputError(f"Image array is empty, shape {arr.shape}.")
        if arr.dtype.kind == "u" and int(arr.max()) > np.iinfo(np.int64).max:
            raise InvalidArgumentError(
                f"Image array holds components above {np.iinfo(np.int64).max}.")
        arr = arr.astype(np.int64, copy=True)
        arr.flags.writeable = False
        self._array = arr

    @property
    def width(self) -> int:
        return self._array.shape[1]

    @property
    def height(self) -> int:
        return self._array.shape[0]

    @property
    def components(self) -> int:
        return self._array.shape[2]

    @property
    def array(self) -> np.ndarray:
        """Read-only (H, W, C) view of the pixel data."""
        return self._array

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Tuple[int, ...]:
        x = operator.index(x)
        y = operator.index(y)
        # negative indices would silently wrap around in numpy
        if not self.contains(x, y):
            raise OutOfBoundsError(
                f"Pixel ({x}, {y}) lies outside the {self.width}x{self.height} image.")
        return tuple(int(v) for v in self._array[y, x])

    def __repr__(self) -> str:
        return f"ArrayRaster(width={self.width}, height={self.height}, components={self.components})"


def as_raster(image) -> Raster:
    """Wrap numpy arrays and PIL images; pass raster-like objects through."""
    if image is None:
        raise NullOrEmptyInputError("Image is None.")
    if isinstance(image, np.ndarray):
        return ArrayRaster(image)
    if isinstance(image, Image.Image):
        return raster_from_pil(image)
    if isinstance(image, Raster):
        return image
    raise InvalidArgumentError(
        f"Unsupported image type {type(image).__name__}; expected a numpy array, "
        "a PIL image or an object with width, height and get_pixel.")


def component_count(raster: Raster) -> int:
    """Amount of color components per pixel, read at (0, 0) unless exposed."""
    components = getattr(raster, "components", None)
    if components is not None:
        return int(components)
    return len(raster.get_pixel(0, 0))


def raster_from_pil(image: Image.Image) -> ArrayRaster:
    """Convert a PIL image; palette images are expanded to RGBA first."""
    if image.mode == "P":
        image = image.convert("RGBA")
    return ArrayRaster(np.asarray(image))


def load_raster(path: Union[str, Path], backend: str = "opencv") -> ArrayRaster:
    """Load an image file into a raster.

    The OpenCV backend keeps the file's channels in BGR(A) order, the Pillow
    backend yields RGB(A). Sprites and the images matched against them must
    be loaded with the same backend.
    """
    path = Path(path)
    if backend not in SUPPORTED_BACKENDS:
        raise InvalidArgumentError(
            f"Unknown image backend '{backend}', expected one of {', '.join(SUPPORTED_BACKENDS)}.")
    if not path.is_file():
        raise ImageLoadError(f"Image not found: {path}")

    if backend == "opencv":
        image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if image is None:
            raise ImageLoadError(f"Failed to load image: {path}")
        raster = ArrayRaster(image)
    else:
        try:
            with Image.open(path) as image:
                image.load()
                raster = raster_from_pil(image)
        except OSError as e:
            raise ImageLoadError(f"Failed to load image {path}: {e}") from e

    logger.debug(f"Loaded {path} as {raster!r} using {backend}")
    return raster


def load_sprites(paths: Iterable[Union[str, Path]], backend: str = "opencv") -> List[ArrayRaster]:
    """Load sprite files in the given order; the list index is the sprite index."""
    sprites = [load_raster(p, backend=backend) for p in paths]
    logger.info(f"Loaded {len(sprites)} sprites")
    return sprites
