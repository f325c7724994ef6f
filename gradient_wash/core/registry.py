"""
Format Registry - Maps file signatures to decoders and names to encoders

Built once at startup and handed to whatever needs to read or write
images, instead of relying on process-wide registration.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Dict, List, Optional

from .parser import Animation, AnimationParser
from .exporter import AnimationExporter
from ..errors import CodecError

logger = logging.getLogger(__name__)


Decoder = Callable[[BinaryIO, Optional[Path]], Animation]
Encoder = Callable[[Animation, BinaryIO], None]


@dataclass(frozen=True)
class ImageFormat:
    """A registered file format"""
    name: str
    magic: bytes
    decoder: Decoder


class FormatRegistry:
    """Decoder lookup by magic bytes, encoder lookup by format name"""

    def __init__(self):
        self._formats: List[ImageFormat] = []
        self._encoders: Dict[str, Encoder] = {}

    @classmethod
    def with_defaults(cls) -> 'FormatRegistry':
        """Registry with GIF, PNG and JPEG decoding and GIF encoding"""
        registry = cls()
        registry.register('jpeg', b'\xff\xd8', AnimationParser.decode_jpeg)
        registry.register('png', b'\x89PNG\r\n\x1a\n', AnimationParser.decode_png)
        registry.register('gif', b'GIF87a', AnimationParser.decode_gif)
        registry.register('gif', b'GIF89a', AnimationParser.decode_gif)
        registry.register_encoder('gif', AnimationExporter.write_gif)
        return registry

    def register(self, name: str, magic: bytes, decoder: Decoder) -> None:
        self._formats.append(ImageFormat(name, magic, decoder))

    def register_encoder(self, name: str, encoder: Encoder) -> None:
        self._encoders[name] = encoder

    @property
    def header_size(self) -> int:
        return max((len(f.magic) for f in self._formats), default=0)

    def formats(self) -> List[str]:
        return sorted({f.name for f in self._formats})

    def sniff(self, header: bytes) -> Optional[ImageFormat]:
        """Find the format whose signature starts the header"""
        for image_format in self._formats:
            if header.startswith(image_format.magic):
                return image_format
        return None

    def decode(self, path: str | Path) -> Animation:
        """
        Decode an image file.

        Failing to open the file raises OSError; an unknown signature or a
        corrupt file raises CodecError.
        """
        path = Path(path)
        with open(path, 'rb') as f:
            header = f.read(self.header_size)
            image_format = self.sniff(header)
            if image_format is None:
                raise CodecError("Error decoding: image: unknown format")
            f.seek(0)
            logger.debug("%s looks like %s", path, image_format.name)
            return image_format.decoder(f, path)

    def encode(self, animation: Animation, path: str | Path, format: str = 'gif') -> Path:
        """Encode an animation to path; OSError if the file cannot be opened"""
        encoder = self._encoders.get(format)
        if encoder is None:
            raise CodecError(f"Error encoding image: no encoder for {format}")

        path = Path(path)
        with open(path, 'wb') as f:
            encoder(animation, f)

        logger.debug("encoded %d frame(s) as %s to %s", animation.frame_count, format, path)
        return path
