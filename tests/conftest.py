import numpy as np
import pytest
from PIL import Image

QUADRANT_COLOURS = [
    (255, 0, 0, 255),
    (0, 255, 0, 255),
    (0, 0, 255, 255),
    (250, 200, 10, 128),
]


def quadrant_grid(block_size=2):
    """A 2x2 arrangement of solid tiles, each ``block_size`` pixels square."""
    size = block_size * 2
    grid = np.zeros((size, size, 4), dtype=np.uint8)
    for i, colour in enumerate(QUADRANT_COLOURS):
        ty, tx = divmod(i, 2)
        grid[ty * block_size : (ty + 1) * block_size, tx * block_size : (tx + 1) * block_size] = colour
    return grid


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def quadrants():
    return quadrant_grid()


@pytest.fixture
def quadrant_png(tmp_path):
    path = tmp_path / "quadrants.png"
    Image.fromarray(quadrant_grid(block_size=4)).save(path)
    return path


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("this is not an image\n")
    return path
