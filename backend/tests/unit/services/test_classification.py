"""Tests for archetype, risk and diversification classifiers."""

from decimal import Decimal
from unittest.mock import patch

import pytest

from wealthvue.services.portfolio.classification import (
    classify_archetype,
    classify_portfolio,
    score_diversification,
    score_risk,
)


def pct(**shares) -> dict[str, Decimal]:
    return {key: Decimal(str(value)) for key, value in shares.items()}


class TestClassicArchetype:
    """Test the classic decision list, first match wins."""

    @pytest.mark.parametrize(
        "allocation,title",
        [
            (pct(crypto=65), "The Crypto Degen"),
            (pct(crypto=60, stock=40), "The Crypto Degen"),
            (pct(crypto=45, stock=55), "Digital Maverick"),
            (pct(stock=70, crypto=30), "Equity Devotee"),
            (pct(property=50, stock=30, cash=20), "Property Bull"),
            (pct(cash=70, stock=30), "The Cautious Accumulator"),
            (pct(stock=30, crypto=25, cash=25, property=20), "The Diversifier"),
            (pct(other=35, stock=35, cash=30), "The Speculator"),
            (pct(stock=50, crypto=25, cash=25), "Growth Seeker"),
            (pct(stock=50, cash=50), "The Balanced Investor"),
            ({}, "The Balanced Investor"),
        ],
    )
    def test_rules(self, allocation, title):
        assert classify_archetype(allocation, "classic").title == title

    def test_diversifier_needs_max_share_below_forty(self):
        allocation = pct(property=40, vehicle=20, crypto=25, stock=15)
        assert classify_archetype(allocation, "classic").title == "The Balanced Investor"


class TestInvestableArchetype:
    """Test the investable variant, which sets property and vehicles aside."""

    def test_liquid_thresholds_use_renormalized_shares(self):
        allocation = pct(property=40, vehicle=20, crypto=25, stock=15)
        # crypto is 62.5% of the investable 40%
        assert classify_archetype(allocation, "investable").title == "The Crypto Degen"

    def test_property_dominated_with_small_investable_share(self):
        assert classify_archetype(pct(property=90, stock=10), "investable").title == "Property Bull"

    def test_property_rule_uses_full_allocation(self):
        allocation = pct(property=80, stock=10, cash=10)
        assert classify_archetype(allocation, "investable").title == "Property Bull"

    def test_no_investable_assets(self):
        assert classify_archetype(pct(property=60, vehicle=40), "investable").title == "Property Bull"
        assert (
            classify_archetype(pct(property=30, vehicle=70), "investable").title
            == "The Balanced Investor"
        )

    def test_matches_classic_without_property(self):
        allocation = pct(stock=70, crypto=30)
        assert classify_archetype(allocation, "investable") == classify_archetype(allocation, "classic")

    def test_default_variant_comes_from_settings(self):
        allocation = pct(property=40, vehicle=20, crypto=25, stock=15)
        with patch("wealthvue.services.portfolio.classification.settings") as mock_settings:
            mock_settings.archetype_variant = "classic"
            assert classify_archetype(allocation).title == "The Balanced Investor"


class TestScoreRisk:
    """Test score_risk."""

    def test_high(self):
        risk = score_risk(pct(crypto=50, stock=50))
        assert (risk.label, risk.value) == ("High", 3)
        assert risk.score == Decimal("70")

    def test_medium(self):
        assert score_risk(pct(stock=60, cash=20)).label == "Medium"

    def test_boundary_forty_is_medium(self):
        assert score_risk(pct(stock=80, other=20)).value == 2

    def test_low(self):
        risk = score_risk(pct(stock=40, cash=60))
        assert (risk.label, risk.value) == ("Low", 1)
        assert risk.score == Decimal("-22")

    def test_empty_is_low(self):
        assert score_risk({}).value == 1


class TestScoreDiversification:
    """Test score_diversification."""

    def test_even_split_is_fully_diversified(self):
        result = score_diversification(pct(stock=50, crypto=50))
        assert result.score == 100
        assert result.label == "Diversified"

    def test_single_type_is_concentrated(self):
        result = score_diversification(pct(stock=100))
        assert result.score == 8
        assert result.label == "Concentrated"

    def test_moderate(self):
        result = score_diversification(pct(stock=80, crypto=20))
        assert result.hhi == Decimal("0.68")
        assert result.score == 64
        assert result.label == "Moderate"

    def test_concentrated_pair(self):
        assert score_diversification(pct(stock=90, crypto=10)).label == "Concentrated"

    def test_all_zero_shares(self):
        assert score_diversification(pct(stock=0, cash=0)).score == 8

    def test_empty(self):
        assert score_diversification({}).label == "Concentrated"


class TestClassifyPortfolio:
    """Test classify_portfolio bundling."""

    def test_bundles_all_signals(self):
        profile = classify_portfolio(pct(stock=70, crypto=30), "classic")

        assert profile.archetype.title == "Equity Devotee"
        assert profile.risk.label == "High"
        assert profile.diversification.score == 84
