import sys
from pathlib import Path

import pytest

# Make the ringbuf namespace package importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from ringbuf.ring import RingBuffer  # noqa: E402


@pytest.fixture
def ring():
    """Small default-mode buffer, easy to wrap."""
    return RingBuffer(8, strict=False, checked=False)


@pytest.fixture
def strict_ring():
    return RingBuffer(8, strict=True, checked=False)


@pytest.fixture
def checked_ring():
    return RingBuffer(8, strict=False, checked=True)
