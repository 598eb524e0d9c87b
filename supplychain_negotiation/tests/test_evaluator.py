"""
Tests: Strategy Evaluator — min-max normalization and threshold flags.

Run with:
    pytest supplychain_negotiation/tests/test_evaluator.py -v
"""

import pytest
from hypothesis import given, strategies as st

from supplychain_negotiation.engine.evaluator import StrategyEvaluator, meets_thresholds
from supplychain_negotiation.engine.parameters import ParameterDeriver
from supplychain_negotiation.models.schemas import NegotiationThresholds, UserPreferences

from conftest import make_strategy, reference_strategies


def _evaluate(strategies, preferences=None):
    params = ParameterDeriver().derive(preferences)
    return StrategyEvaluator().evaluate(strategies, params)


class TestNormalization:
    def test_reference_sub_scores(self):
        a, b, c = _evaluate(reference_strategies())

        assert (a.cost_score, a.risk_score, a.sustainability_score) == pytest.approx((1.0, 0.0, 0.0))
        assert (b.cost_score, b.risk_score, b.sustainability_score) == pytest.approx((0.0, 1.0, 1.0))
        assert (c.cost_score, c.risk_score, c.sustainability_score) == pytest.approx((0.5, 0.5, 0.5))

    def test_reference_composite_scores(self):
        a, b, c = _evaluate(reference_strategies())
        assert a.negotiation_score == pytest.approx(0.33)
        assert b.negotiation_score == pytest.approx(0.67)
        assert c.negotiation_score == pytest.approx(0.5)

    def test_prioritized_weights_change_composite(self):
        a, b, _ = _evaluate(reference_strategies(), UserPreferences(prioritize_cost=True))
        assert a.negotiation_score == pytest.approx(0.5)
        assert b.negotiation_score == pytest.approx(0.5)

    def test_output_keeps_input_order(self):
        evaluated = _evaluate(reference_strategies())
        assert [e.strategy.strategy_id for e in evaluated] == ["A", "B", "C"]

    def test_tied_dimension_scores_neutral(self):
        strategies = [
            make_strategy("A", 1_000, 0.5, 300),
            make_strategy("B", 1_000, 0.9, 300),
        ]
        a, b = _evaluate(strategies)
        assert a.cost_score == 0.5 and b.cost_score == 0.5
        assert a.sustainability_score == 0.5 and b.sustainability_score == 0.5
        assert a.risk_score == 0.0 and b.risk_score == 1.0

    def test_single_strategy_is_neutral_everywhere(self):
        (only,) = _evaluate([make_strategy("A", 10, 0.1, 10)])
        assert only.cost_score == only.risk_score == only.sustainability_score == 0.5
        assert only.negotiation_score == pytest.approx(0.5)

    def test_empty_set_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            _evaluate([])


class TestThresholdFlag:
    def test_unbounded_thresholds_accept_everything(self):
        assert all(e.meets_thresholds for e in _evaluate(reference_strategies()))

    def test_thresholds_use_raw_values(self):
        evaluated = _evaluate(
            reference_strategies(),
            UserPreferences(max_cost_impact=30_000, min_risk_reduction=0.7),
        )
        assert [e.meets_thresholds for e in evaluated] == [False, False, True]

    def test_bounds_are_inclusive(self):
        strategy = make_strategy("A", 5_000, 0.8, 100)
        thresholds = NegotiationThresholds(
            max_cost_impact=5_000, min_risk_reduction=0.8, max_sustainability_impact=100
        )
        assert meets_thresholds(strategy, thresholds) is True

    def test_sustainability_cap(self):
        strategy = make_strategy("A", 1, 1.0, 101)
        assert meets_thresholds(strategy, NegotiationThresholds(max_sustainability_impact=100)) is False


_impact = st.tuples(
    st.floats(min_value=0, max_value=1e7, allow_nan=False, allow_infinity=False),
    st.floats(min_value=0, max_value=1, allow_nan=False, allow_infinity=False),
    st.floats(min_value=0, max_value=1e6, allow_nan=False, allow_infinity=False),
)


class TestScoreProperties:
    @given(
        impacts=st.lists(_impact, min_size=1, max_size=12),
        flag=st.sampled_from([None, "prioritize_cost", "prioritize_risk", "prioritize_sustainability"]),
    )
    def test_every_score_in_unit_interval(self, impacts, flag):
        strategies = [
            make_strategy(f"S{i}", cost, risk, sus) for i, (cost, risk, sus) in enumerate(impacts)
        ]
        prefs = UserPreferences(**{flag: True}) if flag else None
        for e in _evaluate(strategies, prefs):
            for score in (e.cost_score, e.risk_score, e.sustainability_score, e.negotiation_score):
                assert 0.0 <= score <= 1.0
