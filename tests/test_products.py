"""Tests for deposits, FRAs, swap legs and swaps."""

import math

import pytest

from ratecurves.conventions import EvaluationTimePolicy
from ratecurves.curves import ForwardCurveFromDiscountCurve, InterpolatedDiscountCurve
from ratecurves.errors import MisspecifiedScheduleError, UnsupportedCombinationError
from ratecurves.products import (
    Deposit,
    ForwardRateAgreement,
    RateSwap,
    Swap,
    SwapLeg,
    SwapLegWithResetting,
)
from ratecurves.schedule import Period, Schedule, regular_schedule


def df(t: float) -> float:
    return math.exp(-0.02 * t)


def one_year() -> Schedule:
    return Schedule((Period(0.0, 0.0, 1.0, 1.0, 1.0),))


def test_single_period_floating_leg(model) -> None:
    leg = SwapLeg(one_year(), "forward", 0.0, "discount")
    assert leg.get_value(0.0, model) == pytest.approx(0.025 * df(1.0), rel=1e-12)


def test_fixed_leg_with_notional_exchange(model) -> None:
    leg = SwapLeg(one_year(), None, 0.03, "discount", is_notional_exchanged=True)
    assert leg.get_value(0.0, model) == pytest.approx(-1.0 + 1.03 * df(1.0), rel=1e-12)


def test_cashflows_add_up_to_value(model) -> None:
    leg = SwapLeg(regular_schedule(0.0, 3, 1.0), "forward", 0.001, "discount")
    cashflows = leg.get_cashflows(0.0, model)

    assert [cf.index for cf in cashflows] == [0, 1, 2]
    assert cashflows[1].rate == pytest.approx(0.026)
    assert cashflows[2].discount_factor == pytest.approx(df(3.0))
    assert math.fsum(cf.value for cf in cashflows) == pytest.approx(leg.get_value(0.0, model))


def test_payment_at_evaluation_time_depends_on_policy(model) -> None:
    inclusive = SwapLeg(one_year(), "forward", 0.0, "discount")
    exclusive = SwapLeg(
        one_year(), "forward", 0.0, "discount", time_policy=EvaluationTimePolicy.EXCLUSIVE
    )
    assert inclusive.get_value(1.0, model) == pytest.approx(0.025)
    assert exclusive.get_value(1.0, model) == 0.0


def test_summit_policy_moves_evaluation_to_first_period_start(model) -> None:
    schedule = regular_schedule(1.0, 2, 1.0)
    summit = SwapLeg(
        schedule, None, 0.02, "discount",
        is_notional_exchanged=True, time_policy=EvaluationTimePolicy.SUMMIT,
    )
    inclusive = SwapLeg(schedule, None, 0.02, "discount", is_notional_exchanged=True)

    assert summit.get_value(0.0, model) == pytest.approx(inclusive.get_value(1.0, model))
    assert summit.get_value(0.0, model) != pytest.approx(inclusive.get_value(0.0, model))


def test_zero_day_count_fraction_rejected(model) -> None:
    leg = SwapLeg(Schedule((Period(0.0, 0.0, 1.0, 1.0, 0.0),)), None, 0.01, "discount")
    with pytest.raises(MisspecifiedScheduleError):
        leg.get_value(0.0, model)


def test_empty_schedule_rejected() -> None:
    with pytest.raises(MisspecifiedScheduleError):
        SwapLeg(Schedule(()), None, 0.01, "discount")


def test_single_curve_formula_matches_period_loop(model) -> None:
    schedule = regular_schedule(0.0, 4, 0.5)
    wrapped = model.add_curves(ForwardCurveFromDiscountCurve("discount"))

    closed_form = SwapLeg(schedule, "discount", 0.0, "discount")
    via_wrapper = SwapLeg(schedule, "discount_asForwardCurve", 0.0, "discount")
    loop = SwapLeg(
        schedule, "discount_asForwardCurve", 0.0, "discount", allow_single_curve_formula=False
    )

    expected = 1.0 - df(2.0)
    assert closed_form.get_value(0.0, model) == pytest.approx(expected, rel=1e-12)
    assert via_wrapper.get_value(0.0, wrapped) == pytest.approx(expected, rel=1e-12)
    assert loop.get_value(0.0, wrapped) == pytest.approx(expected, rel=1e-12)


def test_period_loop_on_the_discount_curve_itself(model) -> None:
    schedule = regular_schedule(0.0, 4, 0.5)
    closed_form = SwapLeg(schedule, "discount", 0.0, "discount")
    loop = SwapLeg(schedule, "discount", 0.0, "discount", allow_single_curve_formula=False)

    assert loop.get_value(0.0, model) == pytest.approx(closed_form.get_value(0.0, model), rel=1e-12)
    assert loop.get_cashflows(0.0, model)[0].rate == pytest.approx((math.exp(0.01) - 1.0) / 0.5)
    # The loop supports a spread where the closed form does not
    with_spread = SwapLeg(schedule, "discount", 0.001, "discount", allow_single_curve_formula=False)
    assert with_spread.get_value(0.0, model) == pytest.approx(
        1.0 - df(2.0) + 0.001 * 0.5 * sum(df(0.5 * i) for i in range(1, 5)), rel=1e-12
    )


def test_single_curve_formula_rejects_spread_and_notional_exchange(model) -> None:
    schedule = regular_schedule(0.0, 2, 1.0)
    with pytest.raises(UnsupportedCombinationError):
        SwapLeg(schedule, "discount", 0.001, "discount").get_value(0.0, model)
    with pytest.raises(UnsupportedCombinationError):
        SwapLeg(schedule, "discount", 0.0, "discount", is_notional_exchanged=True).get_value(
            0.0, model
        )


def test_notional_reset_ratio(model) -> None:
    other = InterpolatedDiscountCurve.flat("discount-usd", 0.03, times=range(1, 6))
    model = model.add_curves(other)
    leg = SwapLegWithResetting(regular_schedule(0.0, 3, 1.0), None, 0.01, "discount", "discount-usd")

    notionals = [cf.notional for cf in leg.get_cashflows(0.0, model)]
    assert notionals[0] == pytest.approx(1.0)
    assert notionals[1] == pytest.approx(math.exp(-0.01))
    assert notionals[2] == pytest.approx(math.exp(-0.02))
    assert leg.is_notional_exchanged


def test_resetting_leg_needs_distinct_reset_curve() -> None:
    with pytest.raises(ValueError):
        SwapLegWithResetting(one_year(), None, 0.01, "discount", "discount")
    with pytest.raises(ValueError):
        SwapLegWithResetting(one_year(), None, 0.01, "discount", None)


def test_swap_is_receiver_minus_payer(model) -> None:
    schedule = regular_schedule(0.0, 5, 1.0)
    receiver = SwapLeg(schedule, None, 0.03, "discount")
    payer = SwapLeg(schedule, "forward", 0.0, "discount")
    swap = Swap(receiver, payer)

    assert swap.get_value(0.0, model) == pytest.approx(
        receiver.get_value(0.0, model) - payer.get_value(0.0, model)
    )
    # Fixed 3% against flat 2.5% forwards
    assert swap.get_value(0.0, model) > 0


def test_swap_from_schedules_at_equal_rates_is_worth_zero(model) -> None:
    schedule = regular_schedule(0.0, 3, 1.0)
    swap = Swap.from_schedules(
        schedule, None, 0.025, "discount", schedule, "forward", 0.0, "discount"
    )
    assert swap.get_value(0.0, model) == pytest.approx(0.0, abs=1e-14)


def test_rate_swap_at_forward_swap_rate_is_worth_zero(model) -> None:
    fix_schedule = regular_schedule(0.0, 4, 1.0)
    float_schedule = regular_schedule(0.0, 8, 0.5)
    float_leg = SwapLeg(float_schedule, "forward", 0.0, "discount")

    rate = RateSwap(SwapLeg(fix_schedule, None, 0.0, "discount"), float_leg).get_forward_swap_rate(
        model
    )
    at_par = RateSwap(SwapLeg(fix_schedule, None, rate, "discount"), float_leg)

    assert at_par.get_value(0.0, model) == pytest.approx(0.0, abs=1e-14)
    assert at_par.swap_start == 0.0
    assert at_par.swap_maturity == 4.0
    assert rate == pytest.approx(
        Swap.get_forward_swap_rate(fix_schedule, float_schedule, "forward", "discount", model)
    )


def test_flat_forwards_give_flat_swap_rate(model) -> None:
    schedule = regular_schedule(0.0, 5, 1.0)
    rate = Swap.get_forward_swap_rate(schedule, schedule, "forward", "discount", model)
    assert rate == pytest.approx(0.025, rel=1e-12)


def test_rate_swap_sanity_checks() -> None:
    fix_leg = SwapLeg(regular_schedule(0.0, 2, 1.0), None, 0.02, "discount")
    float_leg = SwapLeg(regular_schedule(0.0, 4, 0.5), "forward", 0.0, "discount")

    with pytest.raises(MisspecifiedScheduleError):
        RateSwap(float_leg, float_leg)
    with pytest.raises(MisspecifiedScheduleError):
        RateSwap(fix_leg, fix_leg)
    with pytest.raises(MisspecifiedScheduleError):
        RateSwap(fix_leg, SwapLeg(regular_schedule(0.5, 3, 0.5), "forward", 0.0, "discount"))
    with pytest.raises(MisspecifiedScheduleError):
        RateSwap(fix_leg, SwapLeg(regular_schedule(0.0, 3, 0.5), "forward", 0.0, "discount"))


def test_deposit_at_its_rate_is_worth_zero(model) -> None:
    deposit = Deposit(one_year(), 0.0, "discount")
    assert deposit.get_value(0.0, model) == pytest.approx(df(1.0) - 1.0)

    fair = Deposit(one_year(), deposit.get_rate(model), "discount")
    assert fair.get_value(0.0, model) == pytest.approx(0.0, abs=1e-15)
    assert deposit.get_rate(model) == pytest.approx(math.exp(0.02) - 1.0)


def test_deposit_needs_exactly_one_period() -> None:
    with pytest.raises(MisspecifiedScheduleError):
        Deposit(regular_schedule(0.0, 2, 0.5), 0.01, "discount")


def test_fra_at_forward_is_worth_zero(model) -> None:
    schedule = Schedule((Period(1.0, 1.0, 1.5, 1.5, 0.5),))
    payer = ForwardRateAgreement(schedule, 0.02, "forward", "discount")
    receiver = ForwardRateAgreement(schedule, 0.02, "forward", "discount", is_payer=False)

    assert payer.get_rate(model) == pytest.approx(0.025)
    expected = 0.005 / (1.0 + 0.025 * 0.5) * df(1.0) * 0.5
    assert payer.get_value(0.0, model) == pytest.approx(expected, rel=1e-12)
    assert receiver.get_value(0.0, model) == pytest.approx(-expected, rel=1e-12)

    at_forward = ForwardRateAgreement(schedule, payer.get_rate(model), "forward", "discount")
    assert at_forward.get_value(0.0, model) == pytest.approx(0.0, abs=1e-16)


def test_fra_after_fixing_is_worth_zero(model) -> None:
    schedule = Schedule((Period(1.0, 1.0, 1.5, 1.5, 0.5),))
    fra = ForwardRateAgreement(
        schedule, 0.02, "forward", "discount", time_policy=EvaluationTimePolicy.EXCLUSIVE
    )
    assert fra.get_value(1.0, model) == 0.0
    assert fra.get_value(2.0, model) == 0.0
