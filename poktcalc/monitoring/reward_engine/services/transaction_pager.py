"""Walks an account's paginated transaction history."""

from typing import Iterator, List
import bittensor as bt

from ..interfaces.provider import Provider
from ..models.transaction import Transaction
from .provider_calls import call_provider


class TransactionPager:
    """Fetches transaction pages in order until a short page is returned."""

    def __init__(self, provider: Provider):
        self.provider = provider

    def iter_pages(
        self,
        address: str,
        page: int,
        per_page: int,
        sort: str
    ) -> Iterator[List[Transaction]]:
        """
        Yield pages starting at `page` in strictly increasing order.

        A page holding fewer than `per_page` records is the last one; it is
        still yielded, even when empty.
        """
        if per_page <= 0:
            raise ValueError(f"per_page must be positive, got {per_page}")

        page_index = page
        while True:
            txs = call_provider(
                "account_transactions",
                self.provider.account_transactions,
                address, page_index, per_page, sort
            )
            bt.logging.debug(f"Fetched page {page_index} for {address}: {len(txs)} transactions")
            yield txs

            if len(txs) < per_page:
                return
            page_index += 1

    def fetch_history(self, address: str, page: int, per_page: int, sort: str) -> List[Transaction]:
        """Return every transaction from `page` onwards as one list."""
        transactions: List[Transaction] = []
        for txs in self.iter_pages(address, page, per_page, sort):
            transactions.extend(txs)
        return transactions

    def iter_matching(
        self,
        address: str,
        page: int,
        per_page: int,
        sort: str,
        limit: int,
        transaction_type: str = ""
    ) -> Iterator[Transaction]:
        """
        Yield up to `limit` transactions matching an optional type filter.

        No further page is requested once the limit is reached, even when it
        is reached part way through a page.
        """
        if limit <= 0:
            return

        matched = 0
        for txs in self.iter_pages(address, page, per_page, sort):
            for tx in txs:
                if transaction_type and tx.type != transaction_type:
                    continue
                yield tx
                matched += 1
                if matched >= limit:
                    return
