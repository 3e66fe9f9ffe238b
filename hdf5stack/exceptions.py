"""Exception types raised by hdf5stack.

Every error derives from :class:`Hdf5StackError` and, where it makes sense,
from the builtin exception a caller would already expect (``ValueError`` for
bad arguments, ``OSError`` for storage failures).
"""


class Hdf5StackError(Exception):
    """Base class for all hdf5stack errors."""

    pass


class InvalidAxisOrderError(Hdf5StackError, ValueError):
    """Raised when an axis order string is malformed or does not fit the data."""

    pass


class MissingRequiredAxisError(InvalidAxisOrderError):
    """Raised when an axis order string lacks the X or Y axis."""

    pass


class ShapeMismatchError(Hdf5StackError, ValueError):
    """Raised when a buffer's element count disagrees with its dimensions."""

    pass


class UnsupportedElementTypeError(Hdf5StackError, TypeError):
    """Raised for pixel types outside uint8, uint16, uint32, float32 and ARGB32."""

    pass


class InvalidCompressionLevelError(Hdf5StackError, ValueError):
    """Raised when a deflate level outside 0..9 is requested."""

    pass


class DatasetIOError(Hdf5StackError, OSError):
    """Raised when the HDF5 file or dataset cannot be opened, read or written."""

    pass
