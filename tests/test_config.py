import logging

import pytest

from ringbuf import config
from ringbuf.errors import (BufferArgumentError, ConfigurationError, OverwriteError, RingBufferError,
                            UnderflowError)
from ringbuf.logger import logger
from ringbuf.ring import RingBuffer


@pytest.mark.parametrize('raw, expected', [
    ('1', True), ('true', True), ('YES', True), (' on ', True),
    ('0', False), ('false', False), ('no', False),
])
def test_env_flag(monkeypatch, raw, expected):
    monkeypatch.setenv('RINGBUF_TEST_FLAG', raw)
    assert config.env_flag('RINGBUF_TEST_FLAG') is expected


def test_env_flag_default(monkeypatch):
    monkeypatch.delenv('RINGBUF_TEST_FLAG', raising=False)
    assert config.env_flag('RINGBUF_TEST_FLAG') is False
    assert config.env_flag('RINGBUF_TEST_FLAG', True) is True
    monkeypatch.setenv('RINGBUF_TEST_FLAG', '')
    assert config.env_flag('RINGBUF_TEST_FLAG', True) is True


def test_defaults_come_from_config(monkeypatch):
    monkeypatch.setattr(config, 'DEFAULT_SIZE', 64)
    monkeypatch.setattr(config, 'STRICT', True)
    monkeypatch.setattr(config, 'CHECKED', True)
    ring = RingBuffer()
    assert ring.capacity == 64
    assert ring.strict is True
    assert ring.checked is True


def test_explicit_flags_override_config(monkeypatch):
    monkeypatch.setattr(config, 'STRICT', True)
    ring = RingBuffer(8, strict=False)
    assert ring.strict is False
    assert ring.read_bytes(1) == b''


def test_bad_default_size(monkeypatch):
    monkeypatch.setattr(config, 'DEFAULT_SIZE', 1000)
    with pytest.raises(ConfigurationError):
        RingBuffer()


def test_logger_configured_once():
    assert logger.name == config.LOG_NAME
    assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)


@pytest.mark.parametrize('exc', [ConfigurationError, OverwriteError, UnderflowError, BufferArgumentError])
def test_error_hierarchy(exc):
    assert issubclass(exc, RingBufferError)


def test_overwrite_error_is_buffer_error():
    ring = RingBuffer(8, strict=False, checked=False)
    with pytest.raises(BufferError):
        ring.skip_write_bytes(9)


def test_load_reads_dotenv(tmp_path, monkeypatch):
    env_file = tmp_path / '.env'
    env_file.write_text('RINGBUF_DEFAULT_SIZE=32\nRINGBUF_STRICT=yes\n')
    # register the variables so monkeypatch restores them afterwards
    monkeypatch.setenv('RINGBUF_DEFAULT_SIZE', '8192')
    monkeypatch.setenv('RINGBUF_STRICT', '0')
    for name in ('DEFAULT_SIZE', 'STRICT', 'CHECKED'):
        monkeypatch.setattr(config, name, getattr(config, name))

    config.load(str(env_file), override=True)
    assert config.DEFAULT_SIZE == 32
    assert config.STRICT is True
    ring = RingBuffer()
    assert ring.capacity == 32
    assert ring.strict is True
