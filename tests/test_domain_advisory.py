"""
Tests for the advisory domain layer.

Tests pure business logic: entities, domain services, errors.
No mocking needed. No IO. Pure functions only.
"""

from datetime import datetime
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal

import pytest

from app.domain.advisory.compound_growth import (
    annual_to_monthly_rate,
    round_money,
    simulate_growth,
)
from app.domain.advisory.entities import (
    InvestmentRecord,
    PortfolioTierSummary,
    Product,
    ProductCategory,
    RiskTier,
    TierTotals,
    YieldBand,
)
from app.domain.advisory.errors import (
    InvalidAmountError,
    InvalidTermError,
    NoApplicableRateError,
)
from app.domain.advisory.portfolio_tiers import aggregate_by_tier
from app.domain.advisory.risk_limit_adjuster import adjust_max_risk
from app.domain.advisory.risk_tiers import classify_risk
from app.domain.advisory.yield_bands import select_band

D = Decimal


def _investment(amount: str, risk: str) -> InvestmentRecord:
    return InvestmentRecord(
        client_id=1,
        product_id=1,
        amount=D(amount),
        yield_rate=D("10"),
        invested_at=datetime(2025, 1, 1),
        product_category=ProductCategory.CDB,
        product_risk=D(risk),
    )


def _product(*bands: tuple[str, str, str]) -> Product:
    return Product(
        id=7,
        name="Tiered CDB",
        category=ProductCategory.CDB,
        risk=D("2"),
        bands=tuple(
            YieldBand(
                id=i,
                product_id=7,
                annual_rate=D(rate),
                range_min=D(low),
                range_max=D(high),
            )
            for i, (rate, low, high) in enumerate(bands, start=1)
        ),
    )


class TestProductCategory:
    """Tests for ProductCategory lookup."""

    @pytest.mark.parametrize("raw", ["cdb", "CDB", " Cdb "])
    def test_parse_ignores_case(self, raw: str) -> None:
        """Category names match regardless of case and padding."""
        assert ProductCategory.parse(raw) is ProductCategory.CDB

    def test_parse_accepts_display_value(self) -> None:
        """The display value of a category is accepted as well as its name."""
        assert ProductCategory.parse("fund") is ProductCategory.FUND

    def test_parse_unknown_category(self) -> None:
        """Unknown categories raise ValueError."""
        with pytest.raises(ValueError):
            ProductCategory.parse("crypto")


class TestRiskTierClassifier:
    """Tests for classify_risk."""

    @pytest.mark.parametrize(
        "risk, expected",
        [
            ("0.5", RiskTier.LOW),
            ("1.5", RiskTier.LOW),
            ("1.51", RiskTier.MEDIUM),
            ("3.0", RiskTier.MEDIUM),
            ("3.01", RiskTier.HIGH),
            ("5.0", RiskTier.HIGH),
        ],
    )
    def test_boundaries(self, risk: str, expected: RiskTier) -> None:
        """Tier boundaries are closed at 1.5 and 3.0."""
        assert classify_risk(D(risk)) is expected

    def test_labels(self) -> None:
        """Each tier has a capitalized display label."""
        assert [t.label for t in RiskTier] == ["Low", "Medium", "High"]


class TestYieldBandSelector:
    """Tests for select_band."""

    def test_first_matching_band_wins_on_overlap(self) -> None:
        """Overlapping bands resolve to the first band in order."""
        product = _product(("10", "0", "1000"), ("12", "500", "2000"))
        assert select_band(product, D("700")).annual_rate == D("10")

    def test_later_band_used_outside_first_range(self) -> None:
        """An amount only covered by a later band selects that band."""
        product = _product(("10", "0", "1000"), ("12", "500", "2000"))
        assert select_band(product, D("1500")).annual_rate == D("12")

    def test_bounds_are_inclusive(self) -> None:
        """Amounts equal to range_min or range_max are covered."""
        product = _product(("10", "100", "1000"))
        assert select_band(product, D("100")).annual_rate == D("10")
        assert select_band(product, D("1000")).annual_rate == D("10")

    def test_amount_outside_every_band(self) -> None:
        """No covering band raises NoApplicableRateError."""
        product = _product(("10", "0", "1000"))
        with pytest.raises(NoApplicableRateError) as exc_info:
            select_band(product, D("2500"))
        assert exc_info.value.product_id == 7

    def test_product_without_bands(self) -> None:
        """A product with no bands never has an applicable rate."""
        with pytest.raises(NoApplicableRateError):
            select_band(_product(), D("10"))


class TestRoundMoney:
    """Tests for round_money."""

    def test_half_up_rounds_ties_away_from_zero(self) -> None:
        assert round_money(D("0.125"), ROUND_HALF_UP) == D("0.13")
        assert round_money(D("-0.125"), ROUND_HALF_UP) == D("-0.13")

    def test_half_even_rounds_ties_to_even(self) -> None:
        assert round_money(D("0.125"), ROUND_HALF_EVEN) == D("0.12")
        assert round_money(D("0.135"), ROUND_HALF_EVEN) == D("0.14")

    def test_default_is_half_up(self) -> None:
        assert round_money(D("2.675")) == D("2.68")


class TestCompoundGrowthSimulator:
    """Tests for simulate_growth."""

    def test_reference_projection(self) -> None:
        """1000 at 12.37445% for 12 months gives the published figures."""
        result = simulate_growth(D("1000"), D("12.37445"), 12)
        assert result.monthly_rate == D("0.98")
        assert result.final_value == D("1124.15")
        assert result.effective_yield == D("12.42")
        assert result.term_months == 12

    def test_reference_projection_same_under_half_even(self) -> None:
        """The reference case has no tie that the two rules break differently."""
        result = simulate_growth(D("1000"), D("12.37445"), 12, ROUND_HALF_EVEN)
        assert result.final_value == D("1124.15")
        assert result.effective_yield == D("12.42")

    def test_intermediate_rounding_matters(self) -> None:
        """Compounding the unrounded rate gives a different final value."""
        unrounded = round_money(D("1000") * (1 + D("12.37445") / 100))
        assert unrounded == D("1123.74")
        assert simulate_growth(D("1000"), D("12.37445"), 12).final_value != unrounded

    def test_monthly_rate_is_unrounded_before_step_one(self) -> None:
        """The monthly conversion keeps full precision until rounded."""
        monthly = annual_to_monthly_rate(D("12.37445"))
        assert D("0.9769") < monthly < D("0.9770")

    def test_tie_breaking_rule_changes_result(self) -> None:
        """25 * 1.0098 = 25.245 exactly: the rounding rule decides the cent."""
        half_up = simulate_growth(D("25"), D("12.37445"), 1, ROUND_HALF_UP)
        half_even = simulate_growth(D("25"), D("12.37445"), 1, ROUND_HALF_EVEN)

        assert half_up.final_value == D("25.25")
        assert half_up.effective_yield == D("1.00")
        assert half_even.final_value == D("25.24")
        assert half_even.effective_yield == D("0.96")

    def test_zero_rate_keeps_principal(self) -> None:
        result = simulate_growth(D("500"), D("0"), 24)
        assert result.monthly_rate == D("0.00")
        assert result.final_value == D("500.00")
        assert result.effective_yield == D("0.00")

    def test_negative_rate_loses_value(self) -> None:
        """Negative annual rates are allowed and shrink the principal."""
        result = simulate_growth(D("1000"), D("-12"), 12)
        assert result.monthly_rate < 0
        assert result.final_value < D("1000")
        assert result.effective_yield < 0

    def test_total_loss_rate(self) -> None:
        """A -100% annual rate converts to a -100% monthly rate."""
        assert annual_to_monthly_rate(D("-100")) == D("-100")

    def test_rate_below_total_loss_rejected(self) -> None:
        with pytest.raises(ValueError):
            annual_to_monthly_rate(D("-150"))

    @pytest.mark.parametrize("amount", ["0", "-1"])
    def test_non_positive_amount_rejected(self, amount: str) -> None:
        """Amounts must be strictly positive."""
        with pytest.raises(InvalidAmountError):
            simulate_growth(D(amount), D("10"), 12)

    @pytest.mark.parametrize("term", [0, -3])
    def test_non_positive_term_rejected(self, term: int) -> None:
        """Terms must be at least one month."""
        with pytest.raises(InvalidTermError) as exc_info:
            simulate_growth(D("100"), D("10"), term)
        assert exc_info.value.term_months == term


class TestPortfolioTierAggregator:
    """Tests for aggregate_by_tier."""

    def test_empty_history(self) -> None:
        """No investments yields zero totals for every tier."""
        summary = aggregate_by_tier([])
        for totals in (summary.low, summary.medium, summary.high):
            assert totals == TierTotals(D("0"), 0)

    def test_sums_per_tier(self) -> None:
        summary = aggregate_by_tier(
            [
                _investment("100", "1"),
                _investment("50", "1.5"),
                _investment("300", "2"),
                _investment("400", "4.5"),
            ]
        )
        assert summary.low == TierTotals(D("150"), 2)
        assert summary.medium == TierTotals(D("300"), 1)
        assert summary.high == TierTotals(D("400"), 1)

    def test_divisor_safe_defaults(self) -> None:
        """Empty tiers act as 1 when used as denominators."""
        empty = TierTotals()
        assert empty.divisor_total == D("1")
        assert empty.divisor_count == 1
        filled = TierTotals(D("250"), 3)
        assert filled.divisor_total == D("250")
        assert filled.divisor_count == 3


class TestRiskLimitAdjuster:
    """Tests for adjust_max_risk."""

    def test_conservative_client_moving_up_gains_both_steps(self) -> None:
        """Medium exposure above low exposure by amount and count adds 0.10."""
        summary = PortfolioTierSummary(
            low=TierTotals(D("100"), 1), medium=TierTotals(D("300"), 2)
        )
        assert adjust_max_risk(D("1.5"), D("3.5"), summary) == D("1.60")

    def test_conservative_client_amount_step_only(self) -> None:
        """Only the invested-amount measure exceeds the low tier."""
        summary = PortfolioTierSummary(
            low=TierTotals(D("100"), 3), medium=TierTotals(D("200"), 1)
        )
        assert adjust_max_risk(D("1.5"), D("3.5"), summary) == D("1.55")

    def test_high_exposure_counts_double(self) -> None:
        """A single high investment outweighs a larger low count."""
        summary = PortfolioTierSummary(
            low=TierTotals(D("150"), 1), high=TierTotals(D("100"), 1)
        )
        assert adjust_max_risk(D("1.0"), D("4.0"), summary) == D("1.10")

    def test_low_only_history_keeps_ceiling(self) -> None:
        summary = PortfolioTierSummary(low=TierTotals(D("1000"), 1))
        assert adjust_max_risk(D("1.5"), D("3.5"), summary) == D("1.5")

    def test_first_investment_keeps_ceiling(self) -> None:
        """With no history every ratio is zero."""
        assert adjust_max_risk(D("1.5"), D("3.5"), PortfolioTierSummary()) == D("1.5")

    def test_aggressive_client_moving_down_loses_both_steps(self) -> None:
        summary = PortfolioTierSummary(
            low=TierTotals(D("200"), 2), high=TierTotals(D("100"), 1)
        )
        assert adjust_max_risk(D("5.0"), D("1.0"), summary) == D("4.90")

    def test_moderate_ceiling_never_moves(self) -> None:
        """Ceilings between 1.5 and 3.0 inclusive are outside both branches."""
        summary = PortfolioTierSummary(
            low=TierTotals(D("200"), 2),
            medium=TierTotals(D("500"), 5),
            high=TierTotals(D("100"), 1),
        )
        assert adjust_max_risk(D("2.0"), D("4.0"), summary) == D("2.0")
        assert adjust_max_risk(D("3.0"), D("1.0"), summary) == D("3.0")

    def test_same_risk_as_ceiling_keeps_ceiling(self) -> None:
        summary = PortfolioTierSummary(medium=TierTotals(D("500"), 5))
        assert adjust_max_risk(D("1.5"), D("1.5"), summary) == D("1.5")

    def test_direction_must_match_branch(self) -> None:
        """A conservative client investing below the ceiling is untouched."""
        summary = PortfolioTierSummary(medium=TierTotals(D("500"), 5))
        assert adjust_max_risk(D("1.2"), D("0.5"), summary) == D("1.2")

    def test_idempotent(self) -> None:
        summary = PortfolioTierSummary(
            low=TierTotals(D("100"), 1), medium=TierTotals(D("300"), 2)
        )
        first = adjust_max_risk(D("1.5"), D("3.5"), summary)
        second = adjust_max_risk(D("1.5"), D("3.5"), summary)
        assert first == second

    def test_repeated_upward_moves_stay_within_bounds(self) -> None:
        summary = PortfolioTierSummary(high=TierTotals(D("10000"), 50))
        ceiling = D("0.5")
        for _ in range(200):
            ceiling = adjust_max_risk(ceiling, D("5.0"), summary)
            assert ceiling <= D("5.0")
        assert ceiling <= D("1.6")

    def test_repeated_downward_moves_stay_within_bounds(self) -> None:
        summary = PortfolioTierSummary(low=TierTotals(D("10000"), 50))
        ceiling = D("5.0")
        for _ in range(200):
            ceiling = adjust_max_risk(ceiling, D("0.5"), summary)
            assert ceiling >= D("1.5")
        assert ceiling == D("3.0")
