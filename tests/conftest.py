"""
Shared fixtures: small synthetic paletted frames, animations and GIF files.
"""

import numpy as np
import pytest
from PIL import Image

from gradient_wash.core import Animation, DeviceColor, Frame


PALETTE = (
    DeviceColor(200, 30, 30, 255),
    DeviceColor(30, 160, 60, 255),
    DeviceColor(40, 60, 220, 255),
    DeviceColor(0, 0, 0, 0),
)

WIDTH, HEIGHT = 8, 6


def _indices(seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    indices = rng.integers(0, len(PALETTE), size=(HEIGHT, WIDTH), dtype=np.uint8)
    indices.setflags(write=False)
    return indices


@pytest.fixture
def make_frame():
    """Factory for a paletted Frame with random indices"""
    def _make(seed: int = 0, palette=PALETTE) -> Frame:
        return Frame(indices=_indices(seed), palette=tuple(palette), box=(0, 0, WIDTH, HEIGHT))
    return _make


@pytest.fixture
def animation(make_frame) -> Animation:
    """Three-frame in-memory animation"""
    return Animation(
        frames=[make_frame(seed) for seed in range(3)],
        delays=[80, 90, 100],
        disposals=[1, 2, 1],
        width=WIDTH,
        height=HEIGHT,
        loop=0,
        background=2,
    )


@pytest.fixture
def gif_path(tmp_path):
    """Three-frame GIF on disk sharing one palette, index 3 transparent"""
    flat = []
    for color in PALETTE:
        flat.extend(color[:3])

    images = []
    for seed in range(3):
        img = Image.frombytes('P', (WIDTH, HEIGHT), _indices(seed).tobytes())
        img.putpalette(flat)
        images.append(img)

    path = tmp_path / "source.gif"
    images[0].save(
        path,
        save_all=True,
        append_images=images[1:],
        duration=[80, 90, 100],
        disposal=[1, 2, 1],
        loop=0,
        transparency=3,
        optimize=False,
    )
    return path


@pytest.fixture
def png_path(tmp_path):
    """RGBA still with a transparent top-left corner"""
    pixels = np.zeros((HEIGHT, WIDTH, 4), dtype=np.uint8)
    pixels[:, :, 0] = 220
    pixels[:, :, 1] = np.arange(WIDTH, dtype=np.uint8) * 20
    pixels[:, :, 2] = 40
    pixels[:, :, 3] = 255
    pixels[0:2, 0:2, 3] = 0

    path = tmp_path / "still.png"
    Image.fromarray(pixels).save(path, 'PNG')
    return path
