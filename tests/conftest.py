import os

import pytest
from PIL import Image


def make_image(path, size=(40, 20), mode="RGB", color=(200, 30, 30)):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    if mode == "RGBA":
        color = color + (128,)
    Image.new(mode, size, color).save(path)
    return path


@pytest.fixture
def image_tree(tmp_path):
    """in/a.jpg, in/sub/b.png, in/notes.txt"""
    root = tmp_path / "in"
    make_image(str(root / "a.jpg"))
    make_image(str(root / "sub" / "b.png"), size=(30, 60))
    (root / "notes.txt").write_text("not an image")
    return root
