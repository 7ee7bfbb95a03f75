"""Resolves the protocol parameter set in force at a block height."""

from typing import Any, Callable, Dict
from dataclasses import dataclass
import bittensor as bt

from ..interfaces.provider import Provider
from ..models.params import FormulaKind, ParameterBatch, ParameterSet
from ..exceptions import MissingParameterError, ParameterFormatError
from .provider_calls import call_provider
from ...utils.config import REWARD_SCALING_ACTIVATION_HEIGHT
from ...utils.fixed_point import Dec, parse_int


@dataclass(frozen=True)
class ParameterField:
    """Where a parameter lives, how to parse it and which field it fills."""
    key: str
    group: str
    field_name: str
    parse: Callable[[str], Any]
    scaling: bool = False


PARAMETER_FIELDS = (
    ParameterField("pos/RelaysToTokensMultiplier", "node_params", "relays_to_tokens_multiplier", parse_int),
    ParameterField("pos/DAOAllocation", "node_params", "dao_allocation", parse_int),
    ParameterField("pos/ProposerPercentage", "node_params", "proposer_percentage", parse_int),
    ParameterField("pocketcore/ClaimExpiration", "pocket_params", "claim_expiration_blocks", parse_int),
    ParameterField(
        "pos/ServicerStakeWeightMultiplier", "node_params",
        "servicer_stake_weight_multiplier", Dec.from_str, scaling=True
    ),
    ParameterField(
        "pos/ServicerStakeFloorMultiplier", "node_params",
        "servicer_stake_floor_multiplier", parse_int, scaling=True
    ),
    ParameterField(
        "pos/ServicerStakeFloorMultiplierExponent", "node_params",
        "servicer_stake_floor_multiplier_exponent", Dec.from_str, scaling=True
    ),
    ParameterField(
        "pos/ServicerStakeWeightCeiling", "node_params",
        "servicer_stake_weight_ceiling", parse_int, scaling=True
    ),
)


class ParameterResolver:
    """Builds a ParameterSet from a batch snapshot, falling back to single-key lookups."""

    def __init__(self, provider: Provider, activation_height: int = REWARD_SCALING_ACTIVATION_HEIGHT):
        self.provider = provider
        self.activation_height = activation_height

    def formula_at(self, height: int) -> FormulaKind:
        """Reward formula in force at a height."""
        if height >= self.activation_height:
            return FormulaKind.STAKE_WEIGHTED
        return FormulaKind.LEGACY

    def resolve(self, height: int, force_refresh: bool = False) -> ParameterSet:
        """
        Resolve every parameter needed to compute rewards at a height.

        Args:
            height: Block height to resolve at
            force_refresh: Ask the provider to bypass any cached batch

        Returns:
            ParameterSet for the height

        Raises:
            ProviderError: If the batch snapshot or an individual lookup cannot be fetched
            MissingParameterError: If a required key is in neither the batch nor on chain
            ParameterFormatError: If a value cannot be parsed
        """
        batch = call_provider("params_at_height", self.provider.all_params, height, force_refresh)
        formula = self.formula_at(height)

        values: Dict[str, Any] = {}
        for entry in PARAMETER_FIELDS:
            if not self._is_required(entry, formula):
                continue
            values[entry.field_name] = self._resolve_value(entry, batch, height)

        return ParameterSet(height=height, formula=formula, **values)

    def _is_required(self, entry: ParameterField, formula: FormulaKind) -> bool:
        return not entry.scaling or formula is FormulaKind.STAKE_WEIGHTED

    def _resolve_value(self, entry: ParameterField, batch: ParameterBatch, height: int) -> Any:
        """Batch first, then an individual on-chain query, then fail."""
        raw = batch.get(entry.group, entry.key) if batch is not None else None
        if not raw:
            raw = self._lookup_individual(entry.key, height)
            if not raw:
                raise MissingParameterError(entry.key, height)

        try:
            return entry.parse(raw)
        except ValueError as e:
            raise ParameterFormatError(entry.key, raw, str(e)) from e

    def _lookup_individual(self, key: str, height: int) -> str:
        bt.logging.debug(f"Parameter {key} missing from batch at height {height}, querying individually")
        return call_provider("params_at_height", self.provider.param, key, height)
