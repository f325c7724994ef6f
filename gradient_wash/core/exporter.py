"""
Animation Exporter - Writes washed animations back out as GIF
"""

from PIL import Image
import numpy as np
from typing import BinaryIO, List
from .parser import Animation, Frame
from ..errors import CodecError


class AnimationExporter:
    """Encodes Animation objects"""

    @classmethod
    def write_gif(cls, animation: Animation, stream: BinaryIO) -> None:
        """Encode an animation into an open binary stream"""
        if not animation.frames:
            raise CodecError("Error encoding image: no frames to export")

        images = [cls.frame_to_image(frame) for frame in animation.frames]

        options = {
            'save_all': True,
            'append_images': images[1:],
            'duration': list(animation.delays),
            'disposal': list(animation.disposals),
            'background': animation.background,
            'optimize': False,
        }
        if animation.loop is not None:
            options['loop'] = animation.loop

        try:
            images[0].save(stream, format='GIF', **options)
        except (OSError, ValueError, KeyError, IndexError) as e:
            raise CodecError(f"Error encoding image: {e}") from e

    @classmethod
    def frame_to_image(cls, frame: Frame) -> Image.Image:
        """Rebuild a paletted PIL image from a Frame"""
        indices = np.ascontiguousarray(frame.indices, dtype=np.uint8)
        img = Image.frombytes('P', (frame.width, frame.height), indices.tobytes())

        flat: List[int] = []
        for color in frame.palette:
            flat.extend((color.r, color.g, color.b))
        img.putpalette(flat, 'RGB')

        transparent = frame.transparent_index
        if transparent is not None:
            img.info['transparency'] = transparent

        return img
