"""Unit tests for SessionMatcher."""

from poktcalc.monitoring.reward_engine.models import SessionKey, TYPE_CLAIM, TYPE_PROOF
from poktcalc.monitoring.reward_engine.services import SessionMatcher


class TestSessionMatcher:
    """Test SessionMatcher class."""

    def setup_method(self):
        self.matcher = SessionMatcher()

    def test_classify_splits_by_type(self, tx_factory):
        claim = tx_factory(tx_hash="c", tx_type=TYPE_CLAIM)
        proof = tx_factory(tx_hash="p", tx_type=TYPE_PROOF)
        other = tx_factory(tx_hash="s", tx_type="pos/Send")

        claims, proofs = self.matcher.classify([claim, proof, other])

        key = SessionKey(69997, "app", "0021")
        assert claims == {key: claim}
        assert proofs == {key: proof}

    def test_classify_last_write_wins(self, tx_factory):
        first = tx_factory(tx_hash="first")
        second = tx_factory(tx_hash="second")

        claims, _ = self.matcher.classify([first, second])

        assert len(claims) == 1
        assert next(iter(claims.values())).hash == "second"

    def test_claim_with_successful_proof_confirmed(self, tx_factory):
        confirmed = self.matcher.match([
            tx_factory(tx_hash="c"),
            tx_factory(tx_hash="p", tx_type=TYPE_PROOF, result_code=0),
        ])

        assert [tx.is_confirmed for tx in confirmed.values()] == [True]

    def test_failed_proof_leaves_claim_unconfirmed(self, tx_factory):
        confirmed = self.matcher.match([
            tx_factory(tx_hash="c"),
            tx_factory(tx_hash="p", tx_type=TYPE_PROOF, result_code=5),
        ])

        assert [tx.is_confirmed for tx in confirmed.values()] == [False]

    def test_claim_without_proof_unconfirmed(self, tx_factory):
        confirmed = self.matcher.match([tx_factory(tx_hash="c")])
        assert [tx.is_confirmed for tx in confirmed.values()] == [False]

    def test_proof_for_other_session_does_not_confirm(self, tx_factory):
        confirmed = self.matcher.match([
            tx_factory(tx_hash="c", chain_id="0021"),
            tx_factory(tx_hash="p", tx_type=TYPE_PROOF, chain_id="0009"),
        ])

        assert [tx.is_confirmed for tx in confirmed.values()] == [False]

    def test_confirm_does_not_mutate_input(self, tx_factory):
        claim = tx_factory(tx_hash="c")
        claims, proofs = self.matcher.classify([claim, tx_factory(tx_hash="p", tx_type=TYPE_PROOF)])

        self.matcher.confirm(claims, proofs)

        assert claim.is_confirmed is False
