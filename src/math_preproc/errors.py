"""Exception types raised by the preprocessing core.

Every error derives from :class:`PreprocessError` and from the closest builtin,
so callers may catch either ``PreprocessError`` or e.g. ``ValueError``.
"""


class PreprocessError(Exception):
    """Base class for all preprocessing failures."""


class ImageIOError(PreprocessError, OSError):
    """An image could not be decoded, rendered or written."""


class InvalidDimensions(PreprocessError, ValueError):
    """A reshape was requested with mismatched sizes, or rows differ in width."""


class DimensionMismatch(PreprocessError, ValueError):
    """Two planes combined element-wise do not have the same shape."""


class InvalidKernel(PreprocessError, ValueError):
    """A convolution kernel is empty, ragged, or (strict mode) even-sized."""


class InvalidMask(PreprocessError, ValueError):
    """A channel mask is zero or is not a single contiguous run of bits."""


class OutOfRange(PreprocessError, ValueError):
    """A pixel handed to the histogram lies outside [0, 255]."""
