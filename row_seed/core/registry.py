"""Alias Registry - maps caller-assigned aliases to created record handles.

One registry lives for exactly one orchestrator run. It is filled while
records are created and handed back to the caller as the only by-name lookup
surface for those records.
"""

from __future__ import annotations

from collections.abc import Iterator

from row_seed.core.exceptions import AliasNotFoundError, DuplicateAliasError
from row_seed.store.protocol import RecordHandle


class AliasRegistry:
    """Run-scoped alias to RecordHandle mapping.

    Each alias can be registered once; registration order is preserved.

    Raises:
        DuplicateAliasError: If an alias is registered twice.
    """

    def __init__(self) -> None:
        self._handles: dict[str, RecordHandle] = {}

    def register(self, alias: str, handle: RecordHandle) -> None:
        """Register *handle* under *alias*.

        Raises:
            DuplicateAliasError: If *alias* is already registered.
        """
        if alias in self._handles:
            raise DuplicateAliasError(alias)
        self._handles[alias] = handle

    def resolve(self, alias: str) -> RecordHandle:
        """Look up the record created under *alias*.

        Raises:
            AliasNotFoundError: If no record is registered under *alias*.
        """
        try:
            return self._handles[alias]
        except KeyError:
            raise AliasNotFoundError(alias) from None

    def has(self, alias: str) -> bool:
        """Check if an alias is registered."""
        return alias in self._handles

    @property
    def aliases(self) -> list[str]:
        """List all registered aliases, sorted alphabetically."""
        return sorted(self._handles.keys())

    def items(self) -> list[tuple[str, RecordHandle]]:
        """Alias/handle pairs in registration order."""
        return list(self._handles.items())

    def __contains__(self, alias: object) -> bool:
        return alias in self._handles

    def __iter__(self) -> Iterator[str]:
        return iter(self._handles)

    def __len__(self) -> int:
        """Number of registered aliases."""
        return len(self._handles)
