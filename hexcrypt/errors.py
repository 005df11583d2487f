# Failure kinds shared by the encoder and the decoder


class HexCryptError(Exception):
    exit_code = 1


class IoError(HexCryptError):
    def __init__(self, detail):
        self.detail = detail
        super().__init__(f'I/O error: {detail}')


class InvalidImageSize(HexCryptError):
    def __init__(self, value):
        self.value = value
        super().__init__(f'Invalid image size `{value}`')


class CannotCreateImage(HexCryptError):
    def __init__(self, width, height):
        self.width = width
        self.height = height
        super().__init__(f'Cannot create image with size {width}x{height}')


class ImageError(HexCryptError):
    def __init__(self, detail):
        self.detail = detail
        super().__init__(f'Error processing image: {detail}')


class BytesToString(HexCryptError):
    def __init__(self, detail=None):
        self.detail = detail
        super().__init__('Cannot convert image bytes to string')


def from_os_error(exc: OSError) -> HexCryptError:
    # Pillow reports codec failures as OSError without an errno
    if exc.errno is None:
        return ImageError(exc)
    return IoError(exc)
