class RingBufferError(Exception):
    """Base class for every error raised by ringbuf."""


class ConfigurationError(RingBufferError, ValueError):
    """Buffer size or supplied backing array length is not a power of two."""


class OverwriteError(RingBufferError, BufferError):
    """Advancing the write counter would claim space still holding unread data."""


class UnderflowError(RingBufferError, BufferError):
    """Fewer unread bytes are available than were requested."""


class BufferArgumentError(RingBufferError, ValueError):
    """Source/destination or offset arguments are malformed."""
