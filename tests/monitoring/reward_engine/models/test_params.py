"""Unit tests for parameter models."""

import pytest

from poktcalc.monitoring.reward_engine.models import FormulaKind, ParameterBatch, ParameterSet
from poktcalc.monitoring.utils.fixed_point import Dec


class TestParameterBatch:
    """Test ParameterBatch lookups and validation."""

    def test_get_returns_value(self, batch_factory):
        batch = batch_factory()
        assert batch.get("node_params", "pos/DAOAllocation") == "10"

    def test_get_missing_key_returns_none(self, batch_factory):
        batch = batch_factory(omit=("pos/DAOAllocation",))
        assert batch.get("node_params", "pos/DAOAllocation") is None

    def test_get_missing_group_returns_none(self):
        assert ParameterBatch().get("node_params", "pos/DAOAllocation") is None

    def test_validate_passes_when_all_groups_populated(self, batch_factory):
        batch_factory().validate()

    def test_validate_names_empty_group(self):
        with pytest.raises(ValueError, match="app_params is empty"):
            ParameterBatch().validate()

    def test_from_dict_reads_wire_shape(self):
        batch = ParameterBatch.from_dict({
            "node_params": [
                {"param_key": "pos/DAOAllocation", "param_value": "10"},
                {"param_key": "pos/ProposerPercentage", "param_value": None},
            ],
        })
        assert batch.get("node_params", "pos/DAOAllocation") == "10"
        assert batch.get("node_params", "pos/ProposerPercentage") == ""
        assert batch.groups["app_params"] == ()

    def test_to_dict_from_dict_preserves_entries(self, batch_factory):
        batch = batch_factory()
        assert ParameterBatch.from_dict(batch.to_dict()) == batch


class TestParameterSet:
    """Test derived values on ParameterSet."""

    def _legacy(self, **overrides):
        values = dict(
            height=100,
            formula=FormulaKind.LEGACY,
            relays_to_tokens_multiplier=8461,
            dao_allocation=10,
            proposer_percentage=5,
            claim_expiration_blocks=24,
        )
        values.update(overrides)
        return ParameterSet(**values)

    def test_percentage_to_keep(self):
        assert self._legacy().percentage_to_keep() == Dec.from_str("0.85")

    def test_legacy_pokt_per_relay(self):
        # 8461 / 1e6 * 0.85
        assert self._legacy().legacy_pokt_per_relay() == Dec.from_str("0.00719185")

    def test_full_allocation_keeps_nothing(self):
        params = self._legacy(dao_allocation=90, proposer_percentage=10)
        assert params.percentage_to_keep().is_zero()

    def test_to_dict_omits_scaling_fields_for_legacy(self):
        data = self._legacy().to_dict()
        assert data["formula"] == "legacy"
        assert "servicer_stake_floor_multiplier" not in data

    def test_to_dict_includes_scaling_fields_when_stake_weighted(self):
        params = self._legacy(
            formula=FormulaKind.STAKE_WEIGHTED,
            servicer_stake_weight_multiplier=Dec.from_str("1.5"),
            servicer_stake_floor_multiplier=15000000000,
            servicer_stake_floor_multiplier_exponent=Dec.from_str("0.7"),
            servicer_stake_weight_ceiling=60000000000,
        )
        data = params.to_dict()
        assert params.is_stake_weighted
        assert data["servicer_stake_weight_multiplier"] == "1.500000000000000000"
        assert data["servicer_stake_weight_ceiling"] == 60000000000
