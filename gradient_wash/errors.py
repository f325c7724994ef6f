"""
Error types raised by gradient_wash
"""


class GradientWashError(Exception):
    """Base class for all gradient_wash errors"""


class InvalidColorFormat(GradientWashError, ValueError):
    """A gradient color could not be parsed as 6 hex digits"""


class InvalidArgument(GradientWashError, ValueError):
    """A thread count, loop count, weight or similar argument is out of range"""


class CodecError(GradientWashError):
    """Decoding or encoding an image file failed"""


class ColorConversionError(GradientWashError, ValueError):
    """A device color has no defined perceptual equivalent"""
