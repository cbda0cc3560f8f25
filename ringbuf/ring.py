from typing import Optional

from ringbuf import config
from ringbuf.buffer import Buffer, Readable, Writable
from ringbuf.errors import BufferArgumentError, ConfigurationError, OverwriteError, UnderflowError
from ringbuf.logger import logger

COUNTER_MASK = 0xFFFFFFFF


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


class RingBuffer(Buffer):
    """Fixed-capacity circular byte buffer.

    Two unsigned 32-bit counters hold the total number of bytes ever written
    and read. Physical positions are ``counter & mask``; the unread length is
    the wrapping difference of the counters, which stays correct when either
    counter rolls over 2**32.

    Bulk ``write`` never checks free space: writing more than
    ``remaining_length`` silently overwrites unread data. ``read_bytes`` with
    bad arguments or too little data does nothing and reports 0 (or raises,
    when ``strict``). Single-byte and fixed-width codec paths do no bounds
    checks unless ``checked`` is enabled.
    """

    def __init__(self, size: Optional[int] = None, *, strict: Optional[bool] = None,
                 checked: Optional[bool] = None):
        if size is None:
            size = config.DEFAULT_SIZE
        if not isinstance(size, int) or isinstance(size, bool):
            raise ConfigurationError(f'buffer size must be an int, got {type(size).__name__}')
        if not is_power_of_two(size):
            raise ConfigurationError(f'buffer size must be a power of two, got {size}')
        self._setup(bytearray(size), strict, checked)

    @classmethod
    def from_array(cls, array: bytearray, *, strict: Optional[bool] = None,
                   checked: Optional[bool] = None) -> 'RingBuffer':
        """Adopt ``array`` as backing storage. The caller gives up the array."""
        if not isinstance(array, bytearray):
            raise ConfigurationError(f'backing array must be a bytearray, got {type(array).__name__}')
        if not is_power_of_two(len(array)):
            raise ConfigurationError(f'backing array length must be a power of two, got {len(array)}')
        buf = cls.__new__(cls)
        buf._setup(array, strict, checked)
        return buf

    def _setup(self, array: bytearray, strict: Optional[bool], checked: Optional[bool]) -> None:
        self._buf = array
        # slice assignment through a view can never resize the storage
        self._view = memoryview(array)
        self._capacity = len(array)
        self._mask = self._capacity - 1
        self._write_count = 0
        self._read_count = 0
        self._marked_write_count = 0
        self._marked_read_count = 0
        self.strict = config.STRICT if strict is None else bool(strict)
        self.checked = config.CHECKED if checked is None else bool(checked)
        logger.debug("RingBuffer: capacity=%d strict=%s checked=%s",
                     self._capacity, self.strict, self.checked)

    def __len__(self) -> int:
        return self.data_length

    def __repr__(self) -> str:
        return (f'{type(self).__name__}(capacity={self._capacity}, data_length={self.data_length}, '
                f'read_index={self.read_index}, write_index={self.write_index})')

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def write_count(self) -> int:
        return self._write_count

    @property
    def read_count(self) -> int:
        return self._read_count

    @property
    def write_index(self) -> int:
        return self._write_count & self._mask

    @property
    def read_index(self) -> int:
        return self._read_count & self._mask

    @property
    def data_length(self) -> int:
        return (self._write_count - self._read_count) & COUNTER_MASK

    @property
    def remaining_length(self) -> int:
        return self._capacity - self.data_length

    def _reject(self, exc_type, msg: str, *args) -> int:
        if self.strict:
            raise exc_type(msg % args)
        logger.debug("RingBuffer: ignored, " + msg, *args)
        return 0

    def write(self, source: Readable, source_offset: int = 0, count: Optional[int] = None) -> int:
        """Copy ``count`` bytes of ``source`` from ``source_offset``; return the number written."""
        if not source:
            return self._reject(BufferArgumentError, "write from empty source")
        if source_offset < 0 or source_offset > len(source):
            return self._reject(BufferArgumentError, "write source_offset=%d outside source of %d bytes",
                                source_offset, len(source))
        if count is None:
            count = len(source) - source_offset
        if count < 0 or source_offset + count > len(source) or count > self._capacity:
            return self._reject(BufferArgumentError, "write count=%d invalid (offset=%d, source=%d, capacity=%d)",
                                count, source_offset, len(source), self._capacity)
        if count == 0:
            return 0

        src = memoryview(source)
        index = self.write_index
        tail = self._capacity - index
        if tail > count:
            self._view[index:index + count] = src[source_offset:source_offset + count]
        else:
            self._view[index:] = src[source_offset:source_offset + tail]
            self._view[:count - tail] = src[source_offset + tail:source_offset + count]

        self._write_count = (self._write_count + count) & COUNTER_MASK
        return count

    def read_bytes(self, destination, destination_offset: int = 0, count: Optional[int] = None):
        """Read unread bytes.

        ``read_bytes(count)`` returns a new ``bytes`` of that length, or
        ``b''`` if fewer than ``count`` bytes are unread.
        ``read_bytes(destination, destination_offset, count)`` copies into a
        writable buffer and returns the number of bytes copied (0 if nothing
        happened). Either way a short read never consumes anything.
        """
        if isinstance(destination, int):
            if destination < 0:
                self._reject(BufferArgumentError, "read count=%d is negative", destination)
                return b''
            if destination > self.data_length:
                self._reject(UnderflowError, "read count=%d exceeds data_length=%d", destination, self.data_length)
                return b''
            if destination > self._capacity:
                self._reject(BufferArgumentError, "read count=%d exceeds capacity=%d", destination, self._capacity)
                return b''
            out = bytearray(destination)
            if self._read_into(out, 0, destination) == 0:
                return b''
            return bytes(out)
        return self._read_into(destination, destination_offset, count)

    def _read_into(self, destination: Optional[Writable], offset: int, count: Optional[int]) -> int:
        if destination is None:
            return self._reject(BufferArgumentError, "read into None")
        if offset < 0 or offset > len(destination):
            return self._reject(BufferArgumentError, "read destination_offset=%d outside destination of %d bytes",
                                offset, len(destination))
        if count is None:
            count = len(destination) - offset
        if count < 0 or offset + count > len(destination):
            return self._reject(BufferArgumentError, "read count=%d does not fit destination of %d bytes at %d",
                                count, len(destination), offset)
        if self.data_length < count:
            return self._reject(UnderflowError, "read count=%d exceeds data_length=%d",
                                count, self.data_length)
        if count > self._capacity:
            return self._reject(BufferArgumentError, "read count=%d exceeds capacity=%d", count, self._capacity)
        if count == 0:
            return 0

        dst = memoryview(destination)
        index = self.read_index
        tail = self._capacity - index
        if tail > count:
            dst[offset:offset + count] = self._view[index:index + count]
        else:
            dst[offset:offset + tail] = self._view[index:]
            dst[offset + tail:offset + count] = self._view[:count - tail]

        self._read_count = (self._read_count + count) & COUNTER_MASK
        return count

    def write_byte(self, value: int) -> None:
        if self.checked and self.remaining_length < 1:
            raise OverwriteError('write_byte on a full buffer')
        self._buf[self.write_index] = value & 0xFF
        self._write_count = (self._write_count + 1) & COUNTER_MASK

    def read_byte(self) -> int:
        if self.checked and self.data_length < 1:
            raise UnderflowError('read_byte on an empty buffer')
        value = self._buf[self.read_index]
        self._read_count = (self._read_count + 1) & COUNTER_MASK
        return value

    # fixed-width codecs: byte k of the value lives at (index + k) & mask

    def _put(self, data: bytes) -> None:
        width = len(data)
        if self.checked and width > self.remaining_length:
            raise OverwriteError(f'{width}-byte write with only {self.remaining_length} bytes free')
        buf, mask, index = self._buf, self._mask, self._write_count
        for k in range(width):
            buf[(index + k) & mask] = data[k]
        self._write_count = (self._write_count + width) & COUNTER_MASK

    def _take(self, width: int) -> bytes:
        if self.checked and width > self.data_length:
            raise UnderflowError(f'{width}-byte read with only {self.data_length} bytes unread')
        buf, mask, index = self._buf, self._mask, self._read_count
        data = bytes(buf[(index + k) & mask] for k in range(width))
        self._read_count = (self._read_count + width) & COUNTER_MASK
        return data

    def write_int(self, value: int) -> None:
        self._put((value & 0xFFFFFFFF).to_bytes(4, 'big'))

    def write_int_le(self, value: int) -> None:
        self._put((value & 0xFFFFFFFF).to_bytes(4, 'little'))

    def read_int(self) -> int:
        return int.from_bytes(self._take(4), 'big', signed=True)

    def read_int_le(self) -> int:
        return int.from_bytes(self._take(4), 'little', signed=True)

    def write_long(self, value: int) -> None:
        self._put((value & 0xFFFFFFFFFFFFFFFF).to_bytes(8, 'big'))

    def write_long_le(self, value: int) -> None:
        self._put((value & 0xFFFFFFFFFFFFFFFF).to_bytes(8, 'little'))

    def read_long(self) -> int:
        return int.from_bytes(self._take(8), 'big', signed=True)

    def read_long_le(self) -> int:
        return int.from_bytes(self._take(8), 'little', signed=True)

    def mark_read_index(self) -> None:
        self._marked_read_count = self._read_count

    def reset_read_index(self) -> None:
        logger.debug("RingBuffer: read_count %d -> marked %d", self._read_count, self._marked_read_count)
        self._read_count = self._marked_read_count

    def mark_write_index(self) -> None:
        self._marked_write_count = self._write_count

    def reset_write_index(self) -> None:
        logger.debug("RingBuffer: write_count %d -> marked %d", self._write_count, self._marked_write_count)
        self._write_count = self._marked_write_count

    def skip_write_bytes(self, count: int) -> None:
        """Commit ``count`` bytes placed through ``writable_view()``."""
        if count < 0:
            raise BufferArgumentError(f'skip count must not be negative, got {count}')
        if count > self.remaining_length:
            logger.debug("RingBuffer: refused skip_write_bytes(%d), remaining_length=%d",
                         count, self.remaining_length)
            raise OverwriteError(f'skipping {count} bytes would overwrite unread data '
                                 f'({self.remaining_length} bytes free)')
        self._write_count = (self._write_count + count) & COUNTER_MASK

    def skip_read_bytes(self, count: int) -> None:
        """Discard ``count`` bytes. Not bounded by ``data_length`` unless ``checked``."""
        if count < 0:
            raise BufferArgumentError(f'skip count must not be negative, got {count}')
        if self.checked and count > self.data_length:
            raise UnderflowError(f'skipping {count} bytes with only {self.data_length} unread')
        self._read_count = (self._read_count + count) & COUNTER_MASK

    def clear(self) -> None:
        self._read_count = self._write_count

    def writable_view(self) -> memoryview:
        """Contiguous free region starting at ``write_index``.

        Fill it out of band (``sock.recv_into``, ``file.readinto``) and then
        call ``skip_write_bytes`` with the number of bytes placed. The region
        stops at the physical end of storage; call again after committing to
        reach the head.
        """
        index = self.write_index
        size = max(0, min(self.remaining_length, self._capacity - index))
        return self._view[index:index + size]

    def readable_view(self) -> memoryview:
        """Contiguous unread region starting at ``read_index``; pair with ``skip_read_bytes``."""
        index = self.read_index
        size = max(0, min(self.data_length, self._capacity - index))
        return self._view[index:index + size]
