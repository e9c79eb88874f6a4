from __future__ import annotations

import dataclasses

import pytest

import radixfit
from radixfit import SamplePoint as P


def test_exact_path_on_full_quadratic_reports_fixed_shape_residuals() -> None:
    """2x^2 + 3x + 5: c comes out exact, the x^2 + c check still flags every point."""
    res = radixfit.recover_constant([P(1, 10), P(2, 19), P(3, 32)])
    assert res.constant == 5
    assert res.exact is True
    assert res.determinant == -2
    assert [r.residual for r in res.residuals] == [4, 10, 18]
    assert [r.point for r in res.residuals] == [P(1, 10), P(2, 19), P(3, 32)]
    assert len(res.nonconforming) == 3


def test_exact_path_with_negative_leading_coefficient() -> None:
    big_c = 17
    pts = [P(x, -x * x + big_c) for x in (1, 2, 3)]
    det_c, det = radixfit.cramer_constant(*pts)
    assert det != 0
    res = radixfit.recover_constant(pts)
    assert (res.constant, res.exact) == (big_c, True)
    assert [r.residual for r in res.residuals] == [-2, -8, -18]


@pytest.mark.parametrize("c", [10**18 + 7, -(10**18) - 3, 2**64 + 3])
def test_exact_path_stays_exact_for_huge_values(c: int) -> None:
    pts = [P(x, x * x + c) for x in (1, 2, 3, 7)]
    res = radixfit.recover_constant(pts)
    assert res.constant == c
    assert res.exact
    assert all(r.residual == 0 and r.conforming for r in res.residuals)


def test_only_first_three_points_determine_c() -> None:
    res = radixfit.recover_constant([P(1, 10), P(2, 19), P(3, 32), P(4, 1000)])
    assert res.constant == 5
    assert len(res.residuals) == 4
    assert res.residuals[-1] == radixfit.Residual(P(4, 1000), 1000 - 16 - 5, False)


def test_single_point_uses_fallback() -> None:
    res = radixfit.recover_constant([P(4, 20)])
    assert (res.constant, res.exact, res.determinant) == (4, False, None)
    assert res.residuals == (radixfit.Residual(P(4, 20), 0, True),)
    assert radixfit.simple_constant(P(4, 20)) == 4


def test_two_points_fallback_and_residual_tolerance() -> None:
    res = radixfit.recover_constant([(1, 5), (2, 9)])
    assert (res.constant, res.exact) == (4, False)
    # |1| is still within tolerance
    assert res.residuals[1] == radixfit.Residual(P(2, 9), 1, True)

    res = radixfit.recover_constant([(1, 5), (2, 10)])
    assert res.nonconforming == (radixfit.Residual(P(2, 10), 2, False),)


def test_duplicate_x_is_degenerate_and_falls_back() -> None:
    pts = [P(1, 5), P(1, 5), P(3, 20)]
    _, det = radixfit.cramer_constant(*pts)
    assert det == 0
    res = radixfit.recover_constant(pts)
    assert (res.constant, res.exact, res.determinant) == (4, False, 0)
    assert [r.residual for r in res.residuals] == [0, 0, 7]


def test_ties_round_half_away_from_zero() -> None:
    # roots at 2 and 5 through (1, +-1): c = +-2.5
    assert radixfit.cramer_constant(P(1, 1), P(2, 0), P(5, 0)) == (-30, -12)
    assert radixfit.recover_constant([P(1, 1), P(2, 0), P(5, 0)]).constant == 3
    assert radixfit.recover_constant([P(1, -1), P(2, 0), P(5, 0)]).constant == -3


@pytest.mark.parametrize(
    "num, den, expected",
    [(7, 2, 4), (-7, 2, -4), (7, -2, -4), (-7, -2, 4), (5, 3, 2), (-5, 3, -2), (1, 3, 0), (0, 5, 0), (10, 5, 2)],
)
def test_div_round_half_away(num: int, den: int, expected: int) -> None:
    from radixfit._recover import div_round_half_away

    assert div_round_half_away(num, den) == expected


def test_div_round_half_away_rejects_zero() -> None:
    from radixfit._recover import div_round_half_away

    with pytest.raises(ZeroDivisionError):
        div_round_half_away(1, 0)


def test_empty_input() -> None:
    with pytest.raises(radixfit.EmptyInput):
        radixfit.recover_constant([])
    assert issubclass(radixfit.EmptyInput, radixfit.RecoveryError)
    assert issubclass(radixfit.EmptyInput, ValueError)


def test_verify_with_custom_tolerance() -> None:
    out = radixfit.verify([P(1, 3), P(2, 10)], 1, tol=5)
    assert [(r.residual, r.conforming) for r in out] == [(1, True), (5, True)]
    out = radixfit.verify([P(2, 10)], 1, tol=0)
    assert out[0].conforming is False


def test_result_is_immutable() -> None:
    res = radixfit.recover_constant([P(1, 2)])
    with pytest.raises(dataclasses.FrozenInstanceError):
        res.constant = 0  # type: ignore[misc]
    assert str(P(3, -4)) == "(3, -4)"
