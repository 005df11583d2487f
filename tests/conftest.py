import pytest
from PIL import Image


@pytest.fixture
def write_text(tmp_path):
    def _write(content, name="message.txt"):
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path
    return _write


@pytest.fixture
def write_image(tmp_path):
    def _write(pixels, size, name="image.png", mode="RGB"):
        path = tmp_path / name
        img = Image.new(mode, size)
        img.putdata(pixels)
        img.save(path)
        return path
    return _write
