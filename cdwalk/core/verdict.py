"""What a callback decides about one entry.

A callback returns one of:

- ``None`` or ``CONTINUE``: carry on, descending into directories
- ``SKIP_SUBTREE``: do not descend into this directory
- an exception instance, or ``Verdict.fail(exc)``: record ``exc`` as the
  walk's error and do not descend
- ``Verdict.stop(exc=None)``: end the whole walk now
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Action(Enum):
    """Branch the driver takes after a callback returns."""
    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"
    FAIL = "fail"
    STOP = "stop"


@dataclass(frozen=True)
class Verdict:
    """Tagged result of a callback invocation."""

    action: Action
    error: Optional[BaseException] = None

    @classmethod
    def fail(cls, error: BaseException) -> 'Verdict':
        """Record ``error`` and move on without descending."""
        if error is None:
            raise ValueError("Verdict.fail() requires an error")
        return cls(Action.FAIL, error)

    @classmethod
    def stop(cls, error: Optional[BaseException] = None) -> 'Verdict':
        """End the walk, returning ``error`` if given."""
        return cls(Action.STOP, error)

    @classmethod
    def coerce(cls, value: Any) -> 'Verdict':
        """Turn a callback's return value into a Verdict.

        Raises:
            TypeError: If the value is not a recognised verdict
        """
        if value is None:
            return CONTINUE
        if isinstance(value, Verdict):
            return value
        if isinstance(value, BaseException):
            return cls.fail(value)
        raise TypeError(
            f"callback must return None, a Verdict or an exception, "
            f"not {type(value).__name__}"
        )

    @property
    def is_continue(self) -> bool:
        return self.action is Action.CONTINUE

    @property
    def is_skip(self) -> bool:
        return self.action is Action.SKIP_SUBTREE

    @property
    def is_stop(self) -> bool:
        return self.action is Action.STOP


CONTINUE = Verdict(Action.CONTINUE)
SKIP_SUBTREE = Verdict(Action.SKIP_SUBTREE)
