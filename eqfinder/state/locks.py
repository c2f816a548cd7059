"""Process lock for entries cache rewrites."""

from contextlib import contextmanager
import fcntl

from eqfinder.state.paths import ensure_dirs, lock_file


@contextmanager
def cache_lock():
    ensure_dirs()
    lf = lock_file()
    with lf.open("w") as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
