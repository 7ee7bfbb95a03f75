"""Pairs claims with proofs by session and decides confirmation."""

from dataclasses import replace
from typing import Dict, Iterable, Tuple

from ..models.transaction import SessionKey, Transaction

SessionMap = Dict[SessionKey, Transaction]


class SessionMatcher:
    """Classifies transactions into claims and proofs keyed by session."""

    def classify(self, transactions: Iterable[Transaction]) -> Tuple[SessionMap, SessionMap]:
        """
        Split transactions into claims and proofs.

        A session key seen twice keeps the transaction seen last. Transactions
        of any other type are ignored.
        """
        claims: SessionMap = {}
        proofs: SessionMap = {}
        for tx in transactions:
            if tx.is_claim:
                claims[tx.session_key] = tx
            elif tx.is_proof:
                proofs[tx.session_key] = tx
        return claims, proofs

    def confirm(self, claims: SessionMap, proofs: SessionMap) -> SessionMap:
        """Mark each claim confirmed iff its session has a successful proof."""
        confirmed: SessionMap = {}
        for session_key, claim in claims.items():
            proof = proofs.get(session_key)
            is_confirmed = proof is not None and proof.result_code == 0
            confirmed[session_key] = replace(claim, is_confirmed=is_confirmed)
        return confirmed

    def match(self, transactions: Iterable[Transaction]) -> SessionMap:
        """Classify then confirm in one step."""
        claims, proofs = self.classify(transactions)
        return self.confirm(claims, proofs)
