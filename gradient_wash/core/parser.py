"""
Animation Parser - Reads image files into paletted frames
Supports: animated GIF, plus PNG and JPEG stills as single-frame animations
"""

from PIL import Image, ImageSequence, GifImagePlugin
import numpy as np
import logging
from pathlib import Path
from dataclasses import dataclass, replace
from typing import BinaryIO, Iterable, List, Optional, Tuple

from .color import DeviceColor
from ..errors import CodecError

logger = logging.getLogger(__name__)


DEFAULT_DELAY = 100      # ms, used when a frame carries no duration
TRANSPARENT_INDEX = 255  # palette slot reserved when quantizing RGBA frames
PALETTE_SIZE = 256


@dataclass(frozen=True, eq=False)
class Frame:
    """A paletted frame: pixel -> palette index, plus the palette itself"""
    indices: np.ndarray                 # (h, w) uint8, read-only
    palette: Tuple[DeviceColor, ...]
    box: Tuple[int, int, int, int]      # left, top, right, bottom

    @property
    def width(self) -> int:
        return self.indices.shape[1]

    @property
    def height(self) -> int:
        return self.indices.shape[0]

    @property
    def stride(self) -> int:
        """Indices per row"""
        return self.indices.strides[0] // self.indices.itemsize

    @property
    def transparent_index(self) -> Optional[int]:
        """First fully transparent palette slot, if any"""
        for i, color in enumerate(self.palette):
            if color.a == 0:
                return i
        return None

    def with_palette(self, palette: Iterable[DeviceColor]) -> 'Frame':
        """Same pixels and geometry, different colors"""
        return replace(self, palette=tuple(palette))


@dataclass
class Animation:
    """Decoded frames plus the timing metadata that travels with them"""
    frames: List[Frame]
    delays: List[int]
    disposals: List[int]
    width: int
    height: int
    loop: Optional[int] = 0     # None: no loop extension, play once
    background: int = 0
    format: str = "gif"
    source_path: Optional[Path] = None

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


class AnimationParser:
    """Decodes image streams into Animation objects"""

    @classmethod
    def decode_gif(cls, stream: BinaryIO, path: Optional[Path] = None) -> Animation:
        """Decode every frame of a GIF"""
        # Keep frames paletted unless their palette actually differs. The
        # strategy is a Pillow-wide setting, so put the caller's value back
        previous = GifImagePlugin.LOADING_STRATEGY
        GifImagePlugin.LOADING_STRATEGY = GifImagePlugin.LoadingStrategy.RGB_AFTER_DIFFERENT_PALETTE_ONLY
        try:
            return cls._decode(stream, 'GIF', 'gif', path)
        finally:
            GifImagePlugin.LOADING_STRATEGY = previous

    @classmethod
    def decode_png(cls, stream: BinaryIO, path: Optional[Path] = None) -> Animation:
        return cls._decode(stream, 'PNG', 'png', path)

    @classmethod
    def decode_jpeg(cls, stream: BinaryIO, path: Optional[Path] = None) -> Animation:
        return cls._decode(stream, 'JPEG', 'jpeg', path)

    @classmethod
    def _decode(
        cls,
        stream: BinaryIO,
        pil_format: str,
        name: str,
        path: Optional[Path]
    ) -> Animation:
        try:
            with Image.open(stream, formats=[pil_format]) as img:
                animation = cls._read_frames(img, name)
        except (OSError, SyntaxError, ValueError, EOFError, Image.DecompressionBombError) as e:
            raise CodecError(f"Error decoding: {e}") from e

        animation.source_path = path
        if name != 'gif' and animation.loop is None:
            # A washed still should cycle forever rather than play once
            animation.loop = 0

        logger.debug(
            "decoded %s: %d frame(s), %dx%d",
            name, animation.frame_count, animation.width, animation.height
        )
        return animation

    @classmethod
    def _read_frames(cls, img: Image.Image, name: str) -> Animation:
        width, height = img.size
        loop = img.info.get('loop')
        background = img.info.get('background', 0)

        frames = []
        delays = []
        disposals = []
        for frame in ImageSequence.Iterator(img):
            frames.append(cls.frame_from_image(frame))
            delays.append(int(frame.info.get('duration', DEFAULT_DELAY) or DEFAULT_DELAY))
            disposals.append(int(getattr(frame, 'disposal_method', 0) or 0))

        if not frames:
            raise ValueError("image contains no frames")

        return Animation(
            frames=frames,
            delays=delays,
            disposals=disposals,
            width=width,
            height=height,
            loop=loop,
            background=background if isinstance(background, int) else 0,
            format=name,
        )

    @classmethod
    def frame_from_image(cls, img: Image.Image) -> Frame:
        """Build a Frame from a PIL image, quantizing if it is not paletted"""
        if img.mode == 'P':
            transparency = img.info.get('transparency')
        else:
            img, transparency = cls._to_paletted(img)

        indices = np.array(img, dtype=np.uint8)
        indices.setflags(write=False)

        raw = img.getpalette() or []
        rgb = [tuple(raw[i:i + 3]) for i in range(0, len(raw) - 2, 3)]

        # Every index in the buffer must have a palette entry
        needed = int(indices.max()) + 1 if indices.size else 0
        if transparency is not None and isinstance(transparency, int):
            needed = max(needed, transparency + 1)
        while len(rgb) < needed:
            rgb.append((0, 0, 0))

        alphas = [255] * len(rgb)
        if isinstance(transparency, int):
            if transparency < len(alphas):
                alphas[transparency] = 0
        elif isinstance(transparency, (bytes, bytearray)):
            for i, alpha in enumerate(transparency[:len(alphas)]):
                alphas[i] = alpha

        palette = tuple(DeviceColor(r, g, b, a) for (r, g, b), a in zip(rgb, alphas))

        return Frame(
            indices=indices,
            palette=palette,
            box=(0, 0, img.width, img.height),
        )

    @classmethod
    def _to_paletted(cls, img: Image.Image) -> Tuple[Image.Image, Optional[int]]:
        """Quantize an RGB(A) image, reserving one slot for transparency"""
        rgba = img.convert('RGBA')
        alpha = rgba.split()[3]
        # Mark pixels that should come out transparent
        mask = Image.eval(alpha, lambda a: 255 if a < 128 else 0)
        paletted = rgba.convert('RGB').convert('P', palette=Image.ADAPTIVE, colors=PALETTE_SIZE - 1)

        if mask.getbbox() is None:
            return paletted, None

        raw = paletted.getpalette() or []
        raw = raw[:TRANSPARENT_INDEX * 3]
        raw += [0] * (PALETTE_SIZE * 3 - len(raw))
        paletted.putpalette(raw)
        paletted.paste(TRANSPARENT_INDEX, mask=mask)
        return paletted, TRANSPARENT_INDEX
