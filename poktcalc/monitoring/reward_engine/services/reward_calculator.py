"""Computes the POKT reward earned by a single claim or proof."""

from typing import Optional
import bittensor as bt

from ..interfaces.provider import StakeLookup
from ..models.params import FormulaKind, ParameterSet
from ..models.reward import Reward, RewardCondition
from ..models.transaction import Transaction
from ..exceptions import ParameterFormatError, StakeLookupError
from ...utils.config import PIP22_EXPONENT_DENOMINATOR, POKT_DENOMINATION
from ...utils.fixed_point import Dec


def stake_bin(stake: int, floor_multiplier: int, ceiling: int) -> int:
    """
    Bucket a staked balance into a bin number.

    Both the stake and the ceiling are floored to a multiple of the floor
    multiplier, the smaller of the two is kept, and the result is divided by
    the floor multiplier.
    """
    floored_stake = stake - stake % floor_multiplier
    floored_ceiling = ceiling - ceiling % floor_multiplier
    return min(floored_stake, floored_ceiling) // floor_multiplier


def stake_weight(
    bin_number: int,
    exponent: Dec,
    weight_multiplier: Dec,
    exponent_denominator: int = PIP22_EXPONENT_DENOMINATOR
) -> Dec:
    """Weight factor for a bin: bin ** (exponent) / weight multiplier."""
    return Dec.from_int(bin_number).frac_pow(exponent, exponent_denominator).quo(weight_multiplier)


class RewardCalculator:
    """Applies the legacy or stake-weighted reward formula to a transaction."""

    def __init__(self, exponent_denominator: int = PIP22_EXPONENT_DENOMINATOR):
        self.exponent_denominator = exponent_denominator

    def compute_reward(
        self,
        transaction: Transaction,
        parameters: ParameterSet,
        stake_lookup: Optional[StakeLookup] = None
    ) -> Reward:
        """
        Compute the reward for a transaction.

        Args:
            transaction: Claim or proof carrying a relay count
            parameters: Parameters resolved at the transaction's height
            stake_lookup: Callable returning the servicer's stake at a height,
                only consulted by the stake-weighted formula

        Returns:
            Reward; zero-valued with a condition flag when no reward applies

        Raises:
            StakeLookupError: If the servicer's stake cannot be read
            ParameterFormatError: If the stake weight multiplier is zero
        """
        if transaction.num_relays == 0:
            return Reward.zero(RewardCondition.ZERO_RELAYS)

        if parameters.formula is FormulaKind.LEGACY:
            return self._legacy_reward(transaction, parameters)

        return self._stake_weighted_reward(transaction, parameters, stake_lookup)

    def _legacy_reward(self, transaction: Transaction, parameters: ParameterSet) -> Reward:
        """Flat per-relay rate from the relays-to-tokens multiplier."""
        pokt_per_relay = parameters.legacy_pokt_per_relay()
        gross = pokt_per_relay.mul_int(transaction.num_relays)

        return Reward(
            pokt_amount=gross,
            net_pokt_amount=gross.mul(parameters.percentage_to_keep()),
            stake_weight=Dec.one(),
            pokt_per_relay=pokt_per_relay,
        )

    def _stake_weighted_reward(
        self,
        transaction: Transaction,
        parameters: ParameterSet,
        stake_lookup: Optional[StakeLookup]
    ) -> Reward:
        """Reward scaled by the servicer's stake bin."""
        floor_multiplier = parameters.servicer_stake_floor_multiplier
        if floor_multiplier is None or floor_multiplier <= 0:
            bt.logging.warning(
                f"Stake floor multiplier is {floor_multiplier} at height {parameters.height}; "
                f"reward for {transaction.hash} left at zero"
            )
            return Reward.zero(RewardCondition.ZERO_FLOOR_MULTIPLIER)

        weight_multiplier = parameters.servicer_stake_weight_multiplier
        if weight_multiplier.is_zero():
            raise ParameterFormatError(
                "pos/ServicerStakeWeightMultiplier", str(weight_multiplier), "must be non-zero"
            )

        stake = self._lookup_stake(transaction, stake_lookup)
        bin_number = stake_bin(stake, floor_multiplier, parameters.servicer_stake_weight_ceiling)
        weight = stake_weight(
            bin_number,
            parameters.servicer_stake_floor_multiplier_exponent,
            weight_multiplier,
            self.exponent_denominator,
        )

        gross = Dec.from_int(
            transaction.num_relays * parameters.relays_to_tokens_multiplier
        ).mul(weight).quo_int(POKT_DENOMINATION)

        bt.logging.debug(
            f"tx {transaction.hash}: stake={stake} bin={bin_number} weight={weight} gross={gross}"
        )

        return Reward(
            pokt_amount=gross,
            net_pokt_amount=gross.mul(parameters.percentage_to_keep()),
            stake_weight=weight,
            pokt_per_relay=gross.quo_int(transaction.num_relays),
        )

    def _lookup_stake(self, transaction: Transaction, stake_lookup: Optional[StakeLookup]) -> int:
        if stake_lookup is None:
            raise StakeLookupError(transaction.address, transaction.height, "no stake lookup configured")
        try:
            stake = stake_lookup(transaction.address, transaction.height)
        except Exception as e:
            raise StakeLookupError(transaction.address, transaction.height, str(e)) from e

        if isinstance(stake, bool) or not isinstance(stake, int) or stake < 0:
            raise StakeLookupError(transaction.address, transaction.height, f"invalid stake {stake!r}")
        return stake
