"""Bookkeeping for nested variable-length regions."""

# Standard imports
import logging
from collections.abc import Callable
from dataclasses import dataclass

# Project imports
from pbbcbp.cursor import FieldCursor, parse_hex, parse_int
from pbbcbp.errors import ScopeError, ScopeNotExhausted, ScopeOverrun

logger = logging.getLogger(__name__)

@dataclass
class Scope():
    """An open region with a declared size."""
    name: str
    size: int
    remaining: int
    start: int


class ScopeStack():
    """
    Routes field reads through every open scope.

    A read of n characters is checked against every open scope before
    anything is consumed, then subtracts n from all of them at once, so
    nested scopes shrink together. A scope can only be closed once its
    remaining count is exactly zero.
    """
    def __init__(self, cursor: FieldCursor, trace: bool = False):
        self.cursor = cursor
        self.trace = trace
        self._scopes: list[Scope] = []

    def __repr__(self):
        counts = ", ".join(f"{s.name}={s.remaining}" for s in self._scopes)
        return f"ScopeStack(offset={self.cursor.offset}, [{counts}])"

    @property
    def depth(self) -> int:
        """Number of open scopes."""
        return len(self._scopes)

    @property
    def remaining(self) -> int:
        """Characters left in the innermost open scope."""
        if not self._scopes:
            raise ScopeError(
                "No scope is open", offset=self.cursor.offset
            )
        return self._scopes[-1].remaining

    @property
    def current(self) -> Scope | None:
        """The innermost open scope."""
        return self._scopes[-1] if self._scopes else None

    def open(self, size: int, name: str) -> Scope:
        """Opens a nested scope of the given size."""
        if size < 0:
            raise ValueError(f"Scope size cannot be negative ({size}).")
        parent = self.current
        if parent is not None and size > parent.remaining:
            raise ScopeOverrun(
                size, parent.remaining, parent.name, self.cursor.offset,
                field=name,
            )
        scope = Scope(name, size, size, self.cursor.offset)
        self._scopes.append(scope)
        if self.trace:
            logger.debug(
                "OPEN %s size=%d at offset %d", name, size, scope.start
            )
        return scope

    def close(self,
        on_leftover: Callable[[int, str, int], ScopeError] | None = None
    ) -> Scope:
        """
        Closes the innermost scope.

        Raises ScopeNotExhausted if characters remain. on_leftover can
        build a more specific error from (remaining, scope name, offset).
        """
        scope = self.current
        if scope is None:
            raise ScopeError("No scope is open", offset=self.cursor.offset)
        if scope.remaining != 0:
            if on_leftover is not None:
                raise on_leftover(
                    scope.remaining, scope.name, self.cursor.offset
                )
            raise ScopeNotExhausted(
                scope.remaining, scope.name, self.cursor.offset
            )
        self._scopes.pop()
        if self.trace:
            logger.debug(
                "CLOSE %s at offset %d", scope.name, self.cursor.offset
            )
        return scope

    def read(self, length: int, field: str) -> str:
        """Reads length characters, charging every open scope."""
        for scope in self._scopes:
            if scope.remaining < length:
                raise ScopeOverrun(
                    length, scope.remaining, scope.name,
                    self.cursor.offset, field,
                )
        start = self.cursor.offset
        text = self.cursor.take_text(length, field)
        for scope in self._scopes:
            scope.remaining -= length
        if self.trace:
            logger.debug(
                "READ %s offset=%d width=%d raw=%r remaining=%s",
                field, start, length, text,
                [s.remaining for s in self._scopes],
            )
        return text

    def read_hex(self, length: int, field: str) -> int:
        """Reads a hexadecimal size field."""
        start = self.cursor.offset
        return parse_hex(self.read(length, field), start, field)

    def read_int(self, length: int, field: str) -> int:
        """Reads a decimal field."""
        start = self.cursor.offset
        return parse_int(self.read(length, field), start, field)

    def drain(self, field: str) -> str:
        """Reads whatever is left in the innermost scope."""
        return self.read(self.remaining, field)
