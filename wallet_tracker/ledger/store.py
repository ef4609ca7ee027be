"""
In-Memory Transaction Ledger

The ledger lives exactly as long as the session that owns it.
Nothing is persisted.
"""

from collections.abc import Iterator, Sequence

from wallet_tracker.models.transaction import Transaction


class TransactionLedger(Sequence[Transaction]):
    """
    Append-only, insertion-ordered list of transactions.

    Readers (balance and history) receive the ledger itself as a
    read-only Sequence; only the owning session appends.
    """

    def __init__(self, transactions: Sequence[Transaction] = ()):
        self._transactions: list[Transaction] = list(transactions)

    def append(self, transaction: Transaction) -> None:
        self._transactions.append(transaction)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._transactions[index])
        return self._transactions[index]

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def snapshot(self) -> tuple[Transaction, ...]:
        """Copy of the ledger as it stands now."""
        return tuple(self._transactions)

    def __repr__(self) -> str:
        return f"TransactionLedger({len(self)} transactions)"
