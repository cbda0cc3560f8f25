from abc import ABC, abstractmethod
from typing import Optional, Union

Writable = Union[bytearray, memoryview]
Readable = Union[bytes, bytearray, memoryview]


class Buffer(ABC):
    """Operations every buffer-like type exposes to its collaborators.

    Code that consumes or produces bytes (socket readers, message framers)
    should depend on this contract rather than on a concrete buffer. None of
    the implementations are thread-safe: at most one reader and one writer
    may touch an instance at a time, serialized by the caller.
    """

    @property
    @abstractmethod
    def capacity(self) -> int: ...

    @property
    @abstractmethod
    def read_index(self) -> int: ...

    @property
    @abstractmethod
    def write_index(self) -> int: ...

    @property
    @abstractmethod
    def data_length(self) -> int:
        """Unread bytes."""

    @property
    @abstractmethod
    def remaining_length(self) -> int:
        """Bytes that can be written without overwriting unread data."""

    @abstractmethod
    def write(self, source: Readable, source_offset: int = 0, count: Optional[int] = None) -> int: ...

    @abstractmethod
    def read_bytes(self, destination, destination_offset: int = 0, count: Optional[int] = None): ...

    @abstractmethod
    def write_byte(self, value: int) -> None: ...

    @abstractmethod
    def read_byte(self) -> int: ...

    @abstractmethod
    def write_int(self, value: int) -> None: ...

    @abstractmethod
    def write_int_le(self, value: int) -> None: ...

    @abstractmethod
    def read_int(self) -> int: ...

    @abstractmethod
    def read_int_le(self) -> int: ...

    @abstractmethod
    def write_long(self, value: int) -> None: ...

    @abstractmethod
    def write_long_le(self, value: int) -> None: ...

    @abstractmethod
    def read_long(self) -> int: ...

    @abstractmethod
    def read_long_le(self) -> int: ...

    @abstractmethod
    def mark_read_index(self) -> None: ...

    @abstractmethod
    def reset_read_index(self) -> None: ...

    @abstractmethod
    def mark_write_index(self) -> None: ...

    @abstractmethod
    def reset_write_index(self) -> None: ...

    @abstractmethod
    def skip_write_bytes(self, count: int) -> None: ...

    @abstractmethod
    def skip_read_bytes(self, count: int) -> None: ...

    @abstractmethod
    def writable_view(self) -> memoryview:
        """Contiguous free region at ``write_index``; commit with ``skip_write_bytes``."""

    @abstractmethod
    def readable_view(self) -> memoryview:
        """Contiguous unread region at ``read_index``; consume with ``skip_read_bytes``."""
