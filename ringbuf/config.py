import os
from typing import Optional

from dotenv import load_dotenv


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


DEFAULT_SIZE = int(os.getenv('RINGBUF_DEFAULT_SIZE', 8192))
STRICT = env_flag('RINGBUF_STRICT')
CHECKED = env_flag('RINGBUF_CHECKED')

LOG_NAME = os.getenv('LOG_NAME', 'ringbuf')
LOG_FILE = os.getenv('LOG_FILE')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_MAX_BYTES = int(os.getenv('LOG_MAX_BYTES', 10 * 1024 * 1024))
LOG_BACKUP_COUNT = int(os.getenv('LOG_BACKUP_COUNT', 3))


def load(dotenv_path: Optional[str] = None, override: bool = False) -> None:
    """Read a ``.env`` file into the environment and refresh the buffer defaults.

    Importing ringbuf never touches ``.env``; applications call this from
    their entry point. Logger settings are taken once, when
    ``ringbuf.logger`` is first imported, so call ``load()`` before that if
    the ``.env`` file carries ``LOG_*`` values.
    """
    global DEFAULT_SIZE, STRICT, CHECKED
    load_dotenv(dotenv_path, override=override)
    DEFAULT_SIZE = int(os.getenv('RINGBUF_DEFAULT_SIZE', 8192))
    STRICT = env_flag('RINGBUF_STRICT')
    CHECKED = env_flag('RINGBUF_CHECKED')
