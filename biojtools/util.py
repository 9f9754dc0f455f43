import os
import stat
import tempfile
from contextlib import contextmanager

from .errors import IoError


def strtobool(value: str) -> bool:
    """
    Convert a string representation of truth to True or False.
    :param value: One of y, yes, t, true, on, 1, n, no, f, false, off, 0 (case insensitive).
    :return: bool
    """
    value = value.strip().lower()
    if value in ('y', 'yes', 't', 'true', 'on', '1'):
        return True
    if value in ('n', 'no', 'f', 'false', 'off', '0', ''):
        return False
    raise ValueError("Invalid truth value {!r}".format(value))


def _default_threads():
    threads = os.getenv('BIOJTOOLS_THREADS')
    if threads:
        return max(1, int(threads))
    return len(os.sched_getaffinity(0)) if hasattr(os, 'sched_getaffinity') else (os.cpu_count() or 1)


CACHE_JIT = strtobool(os.getenv('BIOJTOOLS_CACHEJIT', 'False'))
"""bool: Cache numba compiled kernels on disk."""

THREAD_NAME = 'BIOJTOOLS_WORKER'
"""str: Name prefix of worker pool threads."""

DEFAULT_THREADS = _default_threads()
"""int: Default worker pool size."""


def _output_permissions(path) -> int:
    """
    Permission bits for a new output at path.
    An existing file keeps its own, otherwise the bits open() would give a new file under the current umask.
    """
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


@contextmanager
def atomic_output(path, mode='wb'):
    """
    Open a temporary file beside path and move it over path only once the block completes without error.
    On error the temporary file is removed and any existing file at path is left untouched.
    :param path: Destination path.
    :param mode: Mode passed to the file object, must be a write mode.
    :return: Context manager yielding the open temporary file.
    """
    path = os.fspath(path)
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, temp_path = tempfile.mkstemp(dir=directory, prefix='.' + os.path.basename(path) + '.', suffix='.tmp')
    except OSError as e:
        raise IoError("Can not create output: {}".format(e.strerror or e), path) from e
    try:
        with os.fdopen(fd, mode) as output:
            os.chmod(temp_path, _output_permissions(path))
            yield output
        os.replace(temp_path, path)
    except BaseException as e:
        try:
            os.unlink(temp_path)
        except FileNotFoundError:
            pass
        if isinstance(e, OSError):
            raise IoError("Can not write output: {}".format(e.strerror or e), path) from e
        raise
