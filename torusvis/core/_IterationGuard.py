from contextlib import contextmanager

from .exceptions import IterationGuardError

_DEFAULT_MESSAGE = "cannot modify internal state while iterating it"


class IterationGuard:
    """Reference-counting write guard for traversals.

    A collection enables its guard for the duration of a traversal and calls
    :meth:`check` at the top of every structure-modifying method. While the
    reference count is positive, ``check`` raises. Nested traversals simply
    increment the count further, the way a reentrant lock admits nested
    readers; writers are rejected rather than blocked.

    Parameters
    --
    message : str, optional
        Message of the IterationGuardError raised by :meth:`check`.

    Examples
    --
    >>> guard = IterationGuard("cannot add items while iterating over them")
    >>> with guard.guarding():
    ...     guard.check()
    Traceback (most recent call last):
    ...
    torusvis.core.exceptions.IterationGuardError: cannot add items while iterating over them

    """

    def __init__(self, message=None):
        self.reference_count = 0
        self.message = message or _DEFAULT_MESSAGE

    @property
    def active(self) -> bool:
        return self.reference_count > 0

    def set_message(self, message):
        self.message = message
        return self

    def check(self):
        """Raise if a traversal guarded by this guard is in progress."""
        if self.reference_count > 0:
            raise IterationGuardError(self.message)

    def _increment(self, amount=1):
        new_count = self.reference_count + amount
        if new_count < 0:
            raise IterationGuardError("cannot decrement IterationGuard reference count below 0")
        self.reference_count = new_count

    @contextmanager
    def guarding(self):
        """Context manager enabling the guard; released on any exit path."""
        self._increment(+1)
        try:
            yield self
        finally:
            self._increment(-1)

    def run(self, callback):
        """Call ``callback()`` with the guard enabled and return its result."""
        with self.guarding():
            return callback()

    # multi-guard helpers

    @staticmethod
    def check_all(guards):
        """Check each guard in order; the first active one raises."""
        for guard in guards:
            guard.check()

    @staticmethod
    def _increment_all(guards, amount):
        done = []
        try:
            for guard in guards:
                guard._increment(amount)
                done.append(guard)
        except IterationGuardError:
            for guard in done:
                guard._increment(-amount)
            raise

    @classmethod
    @contextmanager
    def guarding_all(cls, guards):
        guards = list(guards)
        cls._increment_all(guards, +1)
        try:
            yield guards
        finally:
            cls._increment_all(guards, -1)

    @classmethod
    def run_all(cls, guards, callback):
        with cls.guarding_all(guards):
            return callback()

    def __repr__(self):
        return f"IterationGuard(reference_count={self.reference_count})"
