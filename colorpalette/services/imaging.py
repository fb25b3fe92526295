"""
colorpalette Imaging Utilities
Pixel source adapters plus image loading, validation and downscaling.

The extractor only ever sees a PixelSource. Which decoder backs it (Pillow
or OpenCV) is chosen by the caller, either by wrapping an already-decoded
image in an adapter or by constructing ImageLoader with a backend name.
"""
import io
import ipaddress
import socket
from pathlib import Path
from typing import Optional, Protocol, Tuple, Union, runtime_checkable
from urllib.parse import urlparse

import cv2
import numpy as np
import requests
from loguru import logger
from PIL import Image, UnidentifiedImageError

from colorpalette.config import config
from colorpalette.exceptions import UnsupportedSourceError

ImageInput = Union[str, Path, bytes, bytearray]

_DOWNLOAD_CHUNK = 64 * 1024


@runtime_checkable
class PixelSource(Protocol):
    """Read access to a decoded RGB(A) raster."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int) -> Tuple[int, ...]: ...

    def to_array(self) -> np.ndarray: ...


class ArrayPixelSource:
    """
    PixelSource over a numpy array in RGB channel order.

    Accepts (H, W) grayscale, (H, W, 1), (H, W, 3) RGB and (H, W, 4) RGBA.
    """

    def __init__(self, array: np.ndarray):
        array = np.asarray(array)
        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        if array.ndim != 3 or array.shape[2] not in (1, 3, 4):
            raise UnsupportedSourceError(f"Unsupported pixel array shape: {array.shape}")
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise UnsupportedSourceError("Image has no pixels")
        if array.shape[2] == 1:
            array = np.repeat(array, 3, axis=2)
        if array.dtype != np.uint8:
            array = np.clip(array, 0, 255).astype(np.uint8)
        self._array = np.ascontiguousarray(array)

    @property
    def width(self) -> int:
        return int(self._array.shape[1])

    @property
    def height(self) -> int:
        return int(self._array.shape[0])

    @property
    def has_alpha(self) -> bool:
        return self._array.shape[2] == 4

    def get_pixel(self, x: int, y: int) -> Tuple[int, ...]:
        return tuple(int(v) for v in self._array[y, x])

    def to_array(self) -> np.ndarray:
        return self._array


class PillowPixelSource(ArrayPixelSource):
    """PixelSource over a PIL image; palette and exotic modes are converted first."""

    def __init__(self, image: Image.Image):
        has_alpha = image.mode in ("RGBA", "LA", "PA") or (
            image.mode == "P" and "transparency" in image.info
        )
        target_mode = "RGBA" if has_alpha else "RGB"
        if image.mode != target_mode:
            image = image.convert(target_mode)
        super().__init__(np.array(image))


class OpenCVPixelSource(ArrayPixelSource):
    """PixelSource over an OpenCV array in BGR/BGRA (or grayscale) order."""

    def __init__(self, image_bgr: np.ndarray):
        image_bgr = np.asarray(image_bgr)
        if image_bgr.ndim == 3 and image_bgr.shape[2] == 4:
            rgb = cv2.cvtColor(image_bgr, cv2.COLOR_BGRA2RGBA)
        elif image_bgr.ndim == 3 and image_bgr.shape[2] == 3:
            rgb = cv2.cvtColor(image_bgr, cv2.COLOR_BGR2RGB)
        else:
            rgb = image_bgr
        super().__init__(rgb)


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Args:
        file_bytes: Raw file bytes

    Returns:
        Detected MIME type

    Raises:
        UnsupportedSourceError: For empty, truncated or non-image data
    """
    if len(file_bytes) < 8:
        raise UnsupportedSourceError("File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    elif file_bytes[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    elif file_bytes[:4] == b'RIFF' and file_bytes[8:12] == b'WEBP':
        return "image/webp"
    elif file_bytes.startswith(b'BM'):
        return "image/bmp"
    else:
        raise UnsupportedSourceError("Invalid image file. Magic bytes don't match supported formats.")


def resize_long_edge(img: np.ndarray, max_edge: Optional[int] = None) -> np.ndarray:
    """
    Resize image so the longest edge is at most max_edge pixels.

    Args:
        img: Input image array (any channel order)
        max_edge: Maximum edge size (default from config)

    Returns:
        Resized image, or the input when already small enough
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE

    height, width = img.shape[:2]
    current_max = max(height, width)

    if current_max <= max_edge:
        return img

    scale = max_edge / current_max
    new_width = max(1, int(width * scale))
    new_height = max(1, int(height * scale))

    # INTER_AREA for downscaling
    return cv2.resize(img, (new_width, new_height), interpolation=cv2.INTER_AREA)


def is_url(source: object) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


class ImageLoader:
    """
    Load images from bytes, filesystem paths or http(s) URLs.

    Every failure surfaces as UnsupportedSourceError before any pixel data
    reaches the extractor.
    """

    def __init__(self, backend: Optional[str] = None, max_file_mb: Optional[int] = None,
                 max_edge: Optional[int] = None, timeout: Optional[float] = None,
                 allow_private_urls: Optional[bool] = None):
        self.backend = backend or config.IMAGE_BACKEND
        if not config.validate_backend(self.backend):
            raise ValueError(f"Unknown image backend: {self.backend}")
        self.max_bytes = (max_file_mb or config.MAX_FILE_MB) * 1024 * 1024
        self.max_edge = max_edge or config.MAX_EDGE
        if not config.validate_max_edge(self.max_edge):
            raise ValueError(f"max_edge must be in [64, 8192], got {self.max_edge}")
        self.timeout = timeout or config.HTTP_TIMEOUT
        self.allow_private_urls = (
            config.ALLOW_PRIVATE_URLS if allow_private_urls is None else allow_private_urls
        )

    def load(self, source: ImageInput) -> ArrayPixelSource:
        """Load any supported source into a PixelSource."""
        if isinstance(source, (bytes, bytearray)):
            return self.load_bytes(bytes(source))
        if is_url(source):
            return self.load_url(source)
        if isinstance(source, (str, Path)):
            return self.load_path(source)
        raise UnsupportedSourceError(f"Unsupported image source type: {type(source).__name__}")

    def load_path(self, path: Union[str, Path]) -> ArrayPixelSource:
        path = Path(path)
        if not path.is_file():
            raise UnsupportedSourceError(f"Image file not found: {path}")
        if path.stat().st_size > self.max_bytes:
            raise UnsupportedSourceError(f"File too large. Maximum size: {self.max_bytes // (1024 * 1024)}MB")

        try:
            data = path.read_bytes()
        except OSError as e:
            raise UnsupportedSourceError(f"Failed to read file: {e}") from e

        logger.debug(f"Loaded {len(data)} bytes from {path}")
        return self.load_bytes(data)

    def load_url(self, url: str) -> ArrayPixelSource:
        """
        Download and decode a remote image.

        Raises:
            UnsupportedSourceError: For non-http(s) URLs, private or reserved
                targets, HTTP errors, non-image content types and oversized bodies
        """
        self._validate_url(url)

        try:
            response = requests.get(
                url,
                stream=True,
                timeout=self.timeout,
                headers={"User-Agent": config.USER_AGENT},
                allow_redirects=False
            )
        except requests.RequestException as e:
            raise UnsupportedSourceError(f"Failed to fetch image: {e}") from e

        try:
            if response.status_code != 200:
                raise UnsupportedSourceError(f"Failed to fetch image: HTTP {response.status_code}")

            content_type = response.headers.get("Content-Type", "").split(";")[0].strip().lower()
            if content_type not in config.SUPPORTED_MIME_TYPES:
                raise UnsupportedSourceError(f"Unsupported content type: {content_type or 'unknown'}")

            declared = response.headers.get("Content-Length")
            if declared and declared.isdigit() and int(declared) > self.max_bytes:
                raise UnsupportedSourceError("Remote image exceeds maximum size")

            buffer = bytearray()
            for chunk in response.iter_content(chunk_size=_DOWNLOAD_CHUNK):
                buffer.extend(chunk)
                if len(buffer) > self.max_bytes:
                    raise UnsupportedSourceError("Remote image exceeds maximum size")
        finally:
            response.close()

        logger.info(f"Downloaded {len(buffer)} bytes from {url}")
        return self.load_bytes(bytes(buffer))

    def load_bytes(self, data: bytes) -> ArrayPixelSource:
        """Validate and decode raw image bytes with the configured backend."""
        if len(data) > self.max_bytes:
            raise UnsupportedSourceError(f"File too large. Maximum size: {self.max_bytes // (1024 * 1024)}MB")

        mime = validate_magic_bytes(data)
        logger.debug(f"Decoding {mime} image with {self.backend} backend")

        if self.backend == "opencv":
            return self._decode_opencv(data)
        return self._decode_pillow(data)

    def _decode_pillow(self, data: bytes) -> PillowPixelSource:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise UnsupportedSourceError(f"Failed to decode image: {e}") from e

        if max(image.size) > self.max_edge:
            image.thumbnail((self.max_edge, self.max_edge), Image.Resampling.BOX)
        return PillowPixelSource(image)

    def _decode_opencv(self, data: bytes) -> OpenCVPixelSource:
        buffer = np.frombuffer(data, dtype=np.uint8)
        decoded = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED)
        if decoded is None:
            raise UnsupportedSourceError("Failed to decode image")
        if decoded.dtype != np.uint8:
            # 16-bit PNGs decode as uint16
            decoded = (decoded / 257).astype(np.uint8)
        return OpenCVPixelSource(resize_long_edge(decoded, self.max_edge))

    def _validate_url(self, url: str):
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            raise UnsupportedSourceError(f"Only http and https URLs are supported: {url}")
        if not parsed.hostname:
            raise UnsupportedSourceError(f"URL has no host: {url}")

        if self.allow_private_urls:
            return

        try:
            infos = socket.getaddrinfo(parsed.hostname, parsed.port or None, proto=socket.IPPROTO_TCP)
        except socket.gaierror as e:
            raise UnsupportedSourceError(f"Cannot resolve host {parsed.hostname}: {e}") from e

        for info in infos:
            address = ipaddress.ip_address(info[4][0])
            if (address.is_private or address.is_loopback or address.is_link_local
                    or address.is_reserved or address.is_multicast or address.is_unspecified):
                raise UnsupportedSourceError(f"URL resolves to a non-public address: {parsed.hostname}")
