"""Process-wide readers/writer lock over the stowage state.

Commands hold the writer side for their whole Unit of Work, so a capacity
check and the commit that relies on it cannot interleave with another
command. Read-only views hold the reader side and see a consistent snapshot.
"""

import threading
from contextlib import contextmanager

from protean.utils.globals import current_domain
from sqlalchemy.exc import SQLAlchemyError

from stowage.errors import StoreFailure
from stowage.utils.logging import get_logger

logger = get_logger(__name__)


class StateLock:
    """Many readers or one writer. The writing thread may also read."""

    def __init__(self):
        self._condition = threading.Condition()
        self._readers = 0
        self._writer = None

    @contextmanager
    def read(self):
        me = threading.get_ident()
        if self._writer == me:
            yield
            return

        with self._condition:
            while self._writer is not None:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write(self):
        me = threading.get_ident()
        if self._writer == me:
            yield
            return

        with self._condition:
            while self._writer is not None or self._readers > 0:
                self._condition.wait()
            self._writer = me
        try:
            yield
        finally:
            with self._condition:
                self._writer = None
                self._condition.notify_all()


state_lock = StateLock()


@contextmanager
def persisting(operation):
    """Re-raise persistence errors from the block as StoreFailure."""
    try:
        yield
    except (OSError, SQLAlchemyError) as exc:
        logger.error("Store failure", operation=operation, error=str(exc))
        raise StoreFailure(f"Could not persist {operation}", operation=operation) from exc


def process_command(command):
    """Run a command synchronously under the writer lock and return its result."""
    with state_lock.write(), persisting(command.__class__.__name__):
        return current_domain.process(command, asynchronous=False)
