import logging
from pathlib import Path

import numpy as np
from PIL import Image

from hexcrypt.errors import CannotCreateImage, ImageError, IoError, from_os_error
from hexcrypt.size import resolve_size

logger = logging.getLogger(__name__)

BYTES_PER_PIXEL = 3


def max_pixels():
    # Pillow's decompression-bomb ceiling, None disables it
    return Image.MAX_IMAGE_PIXELS


def pad_tail(data: bytes) -> bytes:
    # zero-fill a partial trailing group so every source byte gets a pixel
    remainder = len(data) % BYTES_PER_PIXEL
    if remainder:
        data = data + bytes(BYTES_PER_PIXEL - remainder)
    return data


def pack_pixels(data: bytes, dimensions) -> Image.Image:
    """One pixel per whole 3-byte group, unused pixels zero, partial group dropped."""
    width, height = dimensions

    groups, tail = divmod(len(data), BYTES_PER_PIXEL)
    if tail:
        logger.warning('Dropping %d trailing byte(s) that do not fill a pixel', tail)

    diff = width * height - groups
    if diff < 0:
        raise CannotCreateImage(width, height)

    limit = max_pixels()
    if limit is not None and width * height > limit:
        logger.warning('Refusing %dx%d, above the %d pixel limit', width, height, limit)
        raise CannotCreateImage(width, height)

    buf = bytearray(data[:groups * BYTES_PER_PIXEL])
    if diff > 0:
        logger.debug('Padding with %d zero pixel(s)', diff)
        buf.extend(bytes(diff * BYTES_PER_PIXEL))

    if width == 0 or height == 0:
        raise CannotCreateImage(width, height)

    pixels = np.frombuffer(buf, dtype=np.uint8)
    try:
        pixels = pixels.reshape((height, width, BYTES_PER_PIXEL))
    except ValueError as exc:
        raise CannotCreateImage(width, height) from exc

    return Image.fromarray(pixels)


def encode_bytes(data: bytes, size=None, keep_tail=False) -> Image.Image:
    if keep_tail:
        data = pad_tail(data)
    dimensions = resolve_size(size, len(data))
    logger.debug('Encoding %d byte(s) into %dx%d', len(data), dimensions.width, dimensions.height)
    return pack_pixels(data, dimensions)


def encode_text(text: str, size=None, keep_tail=False) -> Image.Image:
    return encode_bytes(text.encode('utf-8'), size, keep_tail)


def save_image(image, output_path):
    try:
        image.save(output_path)
    except OSError as exc:
        raise from_os_error(exc) from exc
    except (ValueError, KeyError) as exc:
        # unknown extension or format name
        raise ImageError(exc) from exc


def read_text_bytes(path: Path) -> bytes:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise IoError(exc) from exc
    try:
        data.decode('utf-8')
    except UnicodeDecodeError as exc:
        raise IoError(f'{path} does not contain valid UTF-8') from exc
    return data


def encrypt(path, size=None, out_path=None, keep_tail=False) -> Path:
    """Encode the UTF-8 text file at `path` as an RGB image.

    The image goes to `out_path`, or next to the input with a .png suffix;
    its format follows the extension. Returns the path written.
    """
    path = Path(path)
    data = read_text_bytes(path)
    image = encode_bytes(data, size, keep_tail)

    output_path = Path(out_path) if out_path is not None else path.with_suffix('.png')
    save_image(image, output_path)
    logger.info('Encoded %s -> %s (%dx%d)', path, output_path, image.width, image.height)
    return output_path
