import io
import logging
from pathlib import Path

from PIL import Image

from hexcrypt.errors import BytesToString, ImageError, IoError, from_os_error

logger = logging.getLogger(__name__)

NUL = '\0'


def unpack_pixels(image: Image.Image) -> str:
    # read the RGB bytes back as text, minus trailing NUL padding
    if image.mode != 'RGB':
        image = image.convert('RGB')
    raw = image.tobytes()
    logger.debug('Unpacking %d byte(s) from %dx%d', len(raw), image.width, image.height)

    try:
        text = raw.decode('utf-8')
    except UnicodeDecodeError as exc:
        raise BytesToString(exc) from exc

    # interior NULs stay, only the padding run at the end goes
    return text.rstrip(NUL)


def load_image(source) -> Image.Image:
    """Open a path or binary file object as a fully loaded RGB image."""
    try:
        with Image.open(source) as img:
            return img.convert('RGB')
    except OSError as exc:
        raise from_os_error(exc) from exc
    except (ValueError, EOFError, SyntaxError, Image.DecompressionBombError) as exc:
        # broken or oversized image data
        raise ImageError(exc) from exc


def decode_image_bytes(blob: bytes) -> str:
    return unpack_pixels(load_image(io.BytesIO(blob)))


def decrypt(path, out_path=None) -> Path:
    """Decode the image at `path` into a UTF-8 text file.

    Writes to `out_path`, or next to the image with a .txt suffix.
    """
    path = Path(path)
    text = unpack_pixels(load_image(path))

    output_path = Path(out_path) if out_path is not None else path.with_suffix('.txt')
    try:
        output_path.write_bytes(text.encode('utf-8'))
    except OSError as exc:
        raise IoError(exc) from exc
    logger.info('Decoded %s -> %s (%d characters)', path, output_path, len(text))
    return output_path
