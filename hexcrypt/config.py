import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hexcrypt.decoder import decrypt
from hexcrypt.encoder import encrypt

ENCODE = 'encode'
DECODE = 'decode'

DEFAULT_MAX_CONTENT_LENGTH = 16 * 1024 * 1024


@dataclass(frozen=True)
class Job:
    """One encode or decode run, built from the command-line flags."""
    mode: str
    source: Path
    output: Optional[Path] = None
    size: Optional[str] = None  # encode only
    keep_tail: bool = False

    @classmethod
    def from_args(cls, args):
        output = Path(args.output) if args.output is not None else None
        if args.encrypt is not None:
            return cls(ENCODE, Path(args.encrypt), output, args.size, args.keep_tail)
        return cls(DECODE, Path(args.decrypt), output)

    @property
    def destination(self) -> Path:
        if self.output is not None:
            return Path(self.output)
        return self.source.with_suffix('.png' if self.mode == ENCODE else '.txt')

    def run(self) -> Path:
        if self.mode == ENCODE:
            return encrypt(self.source, self.size, self.destination, self.keep_tail)
        return decrypt(self.source, self.destination)


def web_settings(environ=None):
    # Flask settings, overridable through HEXCRYPT_* environment variables
    environ = os.environ if environ is None else environ
    return {
        'MAX_CONTENT_LENGTH': int(environ.get('HEXCRYPT_MAX_CONTENT_LENGTH', DEFAULT_MAX_CONTENT_LENGTH)),
        'DEFAULT_SIZE': environ.get('HEXCRYPT_DEFAULT_SIZE') or None,
    }
