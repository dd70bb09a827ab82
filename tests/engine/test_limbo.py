"""
FairPlay - Limbo Resolver Tests
"""

from decimal import Decimal

import pytest

from fairplay.engine.base import LimboParams
from fairplay.engine.errors import InvalidBetParameters
from fairplay.engine.limbo import LimboResolver
from fairplay.engine.payout import PayoutCalculator

EDGE = Decimal("1")
MAX = Decimal("1000000")


class TestMultiplierFromFloat:
    """Tests for LimboResolver.multiplier_from_float()."""

    @pytest.mark.parametrize("value,expected", [
        (0.5, Decimal("1.98")),
        (0.3, Decimal("3.30")),
        (0.99, Decimal("1.00")),
        (0.999, Decimal("1.00")),
        (0.25, Decimal("3.96")),
    ])
    def test_mapping(self, value, expected):
        assert LimboResolver.multiplier_from_float(value, EDGE, MAX) == expected

    def test_truncates_to_two_places(self):
        # 99 / 70 = 1.41428...
        assert LimboResolver.multiplier_from_float(0.7, EDGE, MAX) == Decimal("1.41")

    def test_never_below_one(self):
        for value in (0.9901, 0.995, 0.99999):
            assert LimboResolver.multiplier_from_float(value, EDGE, MAX) == Decimal("1.00")

    def test_zero_float_gives_max(self):
        assert LimboResolver.multiplier_from_float(0.0, EDGE, MAX) == MAX

    def test_tiny_float_capped(self):
        assert LimboResolver.multiplier_from_float(1e-12, EDGE, MAX) == MAX

    def test_custom_cap(self):
        assert LimboResolver.multiplier_from_float(0.001, EDGE, Decimal("50")) == Decimal("50")

    def test_no_house_edge(self):
        assert LimboResolver.multiplier_from_float(0.5, Decimal("0"), MAX) == Decimal("2")

    @pytest.mark.parametrize("value", [-0.5, 1.0])
    def test_out_of_range_raises(self, value):
        with pytest.raises(ValueError):
            LimboResolver.multiplier_from_float(value, EDGE, MAX)


class TestResolve:
    """Tests for LimboResolver.resolve()."""

    def test_win_when_multiplier_reaches_target(self):
        result = LimboResolver.resolve((0.5,), LimboParams(target="1.98"), house_edge=EDGE)
        assert result.multiplier == Decimal("1.98")
        assert result.won is True

    def test_loss_below_target(self):
        result = LimboResolver.resolve((0.5,), LimboParams(target="1.99"), house_edge=EDGE)
        assert result.won is False

    def test_win_chance(self):
        result = LimboResolver.resolve((0.5,), LimboParams(target=2), house_edge=EDGE)
        assert result.win_chance == Decimal("49.5")

    @pytest.mark.parametrize("target", ["1", "1.00", "0.5", "1000000.01"])
    def test_invalid_target(self, target):
        with pytest.raises(InvalidBetParameters, match="Target multiplier must be"):
            LimboResolver.resolve((0.5,), LimboParams(target=target), house_edge=EDGE)

    def test_target_above_custom_max(self):
        with pytest.raises(InvalidBetParameters, match="at most 100"):
            LimboResolver.resolve(
                (0.5,), LimboParams(target=101), house_edge=EDGE, max_multiplier=Decimal("100")
            )

    @pytest.mark.parametrize("target", ["1.01", "1000000"])
    def test_bounds_accepted(self, target):
        LimboResolver.resolve((0.5,), LimboParams(target=target), house_edge=EDGE)


class TestLimboPayout:
    def test_win_pays_target(self):
        result = LimboResolver.resolve((0.25,), LimboParams(target=3), house_edge=EDGE)
        assert PayoutCalculator.for_limbo(result) == Decimal("3")

    def test_loss_pays_zero(self):
        result = LimboResolver.resolve((0.5,), LimboParams(target=3), house_edge=EDGE)
        assert PayoutCalculator.for_limbo(result) == Decimal("0")

    def test_expected_return_matches_house_edge(self):
        target = Decimal("10")
        chance = LimboResolver.win_chance(target, EDGE)
        assert PayoutCalculator.house_edge_of(chance, target) == Decimal("1")
