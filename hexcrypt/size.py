import math
import re
from typing import NamedTuple

from hexcrypt.errors import InvalidImageSize

U32_MAX = 0xFFFFFFFF
_U32 = re.compile(r'\+?[0-9]+')


class Dimensions(NamedTuple):
    width: int
    height: int

    @property
    def capacity(self) -> int:
        # number of 3-byte groups the image holds
        return self.width * self.height


def _parse_u32(part, value):
    if not _U32.fullmatch(part):
        raise InvalidImageSize(value)
    number = int(part)
    if number > U32_MAX:
        raise InvalidImageSize(value)
    return number


def parse_size(value: str) -> Dimensions:
    """Parse 'WxH', e.g. '16x32'. No whitespace, each side an unsigned 32-bit int."""
    width, sep, height = value.partition('x')
    if not sep:
        raise InvalidImageSize(value)
    return Dimensions(_parse_u32(width, value), _parse_u32(height, value))


def default_size(byte_count: int) -> Dimensions:
    # whole groups only, a partial trailing group does not count
    groups = byte_count // 3
    n = math.isqrt(groups)
    if n * n < groups:
        n += 1
    return Dimensions(n, n)


def resolve_size(value, byte_count: int) -> Dimensions:
    if value is None:
        return default_size(byte_count)
    return parse_size(value)
