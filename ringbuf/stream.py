from typing import Callable, Optional

from ringbuf.buffer import Buffer
from ringbuf.logger import logger


def _reader(source) -> Callable:
    for name in ('recv_into', 'readinto'):
        fn = getattr(source, name, None)
        if fn is not None:
            return fn
    raise TypeError(f'{type(source).__name__} has neither recv_into() nor readinto()')


def _writer(sink) -> Callable:
    for name in ('send', 'write'):
        fn = getattr(sink, name, None)
        if fn is not None:
            return fn
    raise TypeError(f'{type(sink).__name__} has neither send() nor write()')


def fill_from(buffer: Buffer, source, limit: Optional[int] = None) -> int:
    """Read from a socket or binary file straight into ``buffer``.

    Stops when the buffer is full, ``limit`` bytes were moved, or the source
    returns fewer bytes than asked for (EOF, or nothing more available on a
    non-blocking source). Returns the number of bytes moved.
    """
    read_into = _reader(source)
    moved = 0
    while limit is None or moved < limit:
        view = buffer.writable_view()
        if limit is not None:
            view = view[:limit - moved]
        if not view:
            break
        n = read_into(view)
        if not n:
            break
        buffer.skip_write_bytes(n)
        moved += n
        if n < len(view):
            break

    logger.debug("fill_from: moved=%d data_length=%d", moved, buffer.data_length)
    return moved


def drain_to(buffer: Buffer, sink, limit: Optional[int] = None) -> int:
    """Write unread bytes of ``buffer`` to a socket or binary file.

    Only what the sink accepts is consumed; a short write ends the call.
    Returns the number of bytes moved.
    """
    write = _writer(sink)
    moved = 0
    while limit is None or moved < limit:
        view = buffer.readable_view()
        if limit is not None:
            view = view[:limit - moved]
        if not view:
            break
        n = write(view)
        if not n:
            break
        buffer.skip_read_bytes(n)
        moved += n
        if n < len(view):
            break

    logger.debug("drain_to: moved=%d data_length=%d", moved, buffer.data_length)
    return moved
