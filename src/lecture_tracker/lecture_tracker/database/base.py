from __future__ import annotations

from typing import ContextManager, Protocol


class TransactionManager(Protocol):
    """Groups repository calls into one atomic, durably committed unit.

    Transactions nest; only the outermost one commits. An exception inside the
    block rolls everything back and propagates.
    """

    def transaction(self) -> ContextManager[object]:
        raise NotImplementedError
