import pytest
from PIL import Image

from hexcrypt.decoder import decode_image_bytes, decrypt, unpack_pixels
from hexcrypt.encoder import encode_text, encrypt
from hexcrypt.errors import BytesToString, ImageError, IoError


@pytest.mark.parametrize("text", [
    "Hi!",
    "The quick brown fox jumps over the lazy dog!!",
    "héllo✓",
    "line one\nline two\r\n\t\t",
])
def test_round_trip(write_text, text):
    assert len(text.encode("utf-8")) % 3 == 0
    decoded = decrypt(encrypt(write_text(text)))
    assert decoded.read_bytes().decode("utf-8") == text


def test_round_trip_with_explicit_size(write_text):
    source = write_text("Hi!")
    image_path = encrypt(source, "2x2")
    output = decrypt(image_path, image_path.parent / "back.txt")
    assert output.read_bytes() == b"Hi!"


def test_black_pixel_decodes_to_empty_file(write_image):
    path = write_image([(0, 0, 0)], (1, 1), name="black.png")
    written = decrypt(path)
    assert written == path.with_suffix(".txt")
    assert written.read_bytes() == b""


def test_interior_nul_survives_trimming():
    image = encode_text("a\0b\0c\0", size="3x3")
    assert unpack_pixels(image) == "a\0b\0c"
    image = encode_text("ab\0\0cd", size="2x2")
    assert unpack_pixels(image) == "ab\0\0cd"


def test_leading_nul_is_kept():
    assert unpack_pixels(encode_text("\0ab")) == "\0ab"


def test_trimming_is_idempotent():
    once = unpack_pixels(encode_text("xyz", size="4x4"))
    assert once == "xyz"
    assert unpack_pixels(encode_text(once, size="4x4")) == once


def test_invalid_utf8_pixels(write_image):
    path = write_image([(0xff, 0xfe, 0xfd)], (1, 1))
    with pytest.raises(BytesToString):
        decrypt(path)
    assert not path.with_suffix(".txt").exists()


def test_padding_splitting_multibyte_character():
    # a 2-byte character cut after its first byte, then zero padding
    image = Image.frombytes("RGB", (1, 1), b"a\xc3\x00")
    with pytest.raises(BytesToString):
        unpack_pixels(image)


def test_non_rgb_image_is_converted(write_image):
    path = write_image([(72, 105, 33, 255)], (1, 1), name="rgba.png", mode="RGBA")
    assert decrypt(path).read_text(encoding="utf-8") == "Hi!"


def test_missing_image(tmp_path):
    with pytest.raises(IoError):
        decrypt(tmp_path / "missing.png")


def test_not_an_image(write_text):
    with pytest.raises(ImageError):
        decrypt(write_text("definitely not a png", name="fake.png"))


def test_truncated_image(write_image):
    path = write_image([(1, 2, 3)] * 64, (8, 8))
    data = path.read_bytes()
    path.write_bytes(data[:len(data) // 2])
    with pytest.raises(ImageError):
        decrypt(path)


def test_decode_image_bytes(write_text):
    image_path = encrypt(write_text("abcdef"))
    assert decode_image_bytes(image_path.read_bytes()) == "abcdef"


def test_decrypt_default_output_name(write_text):
    image_path = encrypt(write_text("abc", name="doc.md"))
    assert image_path.name == "doc.png"
    assert decrypt(image_path).name == "doc.txt"
