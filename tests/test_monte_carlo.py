"""Unit tests for the Monte Carlo runner and its sampling helpers"""

import math

import numpy as np
import pytest

from core.config import SimulationConfig
from distributions.sampler import NormalSampler, box_muller_normal, compute_monthly_log_params
from engine.projection import project
from engine.runner import run_deterministic_simulation, run_monte_carlo_simulation, simulate_path
from pm.aggregator import percentile


def _bands_ordered(result) -> bool:
    return all(b.p10 <= b.p25 <= b.p50 <= b.p75 <= b.p90 for b in result.yearly_data)


def test_box_muller_redraws_zero(scripted_uniform):
    z = box_muller_normal(scripted_uniform([0.0, 0.0, 0.5, 0.0]))
    assert z == pytest.approx(math.sqrt(-2 * math.log(0.5)))


def test_box_muller_cosine_branch(scripted_uniform):
    z = box_muller_normal(scripted_uniform([0.5, 0.5]))
    assert z == pytest.approx(-math.sqrt(-2 * math.log(0.5)))


def test_normal_sampler_draws_standard_normals(seeded_rng):
    zs = NormalSampler(seeded_rng).draw_many(20000)
    assert abs(zs.mean()) < 0.05
    assert zs.std() == pytest.approx(1.0, abs=0.05)


def test_monthly_log_params_are_drift_corrected():
    params = compute_monthly_log_params(7, 15)
    assert params.monthly_log_mean == pytest.approx((math.log(1.07) - 0.15 ** 2 / 2) / 12)
    assert params.monthly_log_std == pytest.approx(0.15 / math.sqrt(12))


def test_percentile_linear_interpolation():
    assert percentile([1, 2, 3, 4], 50) == pytest.approx(2.5)
    assert percentile([1, 2, 3, 4], 10) == pytest.approx(1.3)
    assert percentile([7], 90) == 7
    assert percentile([], 50) == 0


def test_simulate_path_returns_one_value_per_year(seeded_rng):
    params = compute_monthly_log_params(7, 15)
    values = simulate_path(10000, 100, params, 5, seeded_rng.random)
    assert values.shape == (5,)
    assert (values >= 0).all()


def test_simulate_path_floors_at_zero(seeded_rng):
    params = compute_monthly_log_params(7, 15)
    values = simulate_path(100, -1000, params, 2, seeded_rng.random)
    assert values.tolist() == [0.0, 0.0]


def test_percentile_bands_are_ordered(seeded_rng):
    result = run_monte_carlo_simulation(50000, 250, 7, 15, 3, 15, 200, rng=seeded_rng)

    assert len(result.yearly_data) == 15
    assert [b.year for b in result.yearly_data] == list(range(1, 16))
    assert _bands_ordered(result)


def test_final_values_sorted_and_complete(seeded_rng):
    result = run_monte_carlo_simulation(10000, 100, 6, 12, 0, 10, 150, rng=seeded_rng)

    assert len(result.final_values) == 150
    assert np.all(np.diff(result.final_values) >= 0)
    assert result.median_final == pytest.approx(np.median(result.final_values))
    assert result.mean_final == pytest.approx(np.mean(result.final_values))


def test_probabilities_within_unit_interval(seeded_rng):
    result = run_monte_carlo_simulation(10000, 0, 5, 30, 2, 10, 300, rng=seeded_rng)
    assert 0 <= result.probability_of_doubling <= 1
    assert 0 <= result.probability_of_loss <= 1


def test_zero_volatility_collapses_to_deterministic_path():
    result = run_monte_carlo_simulation(100000, 500, 7, 0, 0, 30, 500)

    for band in result.yearly_data:
        assert band.p10 == band.p25 == band.p50 == band.p75 == band.p90

    for year in (1, 10, 30):
        expected = project(100000, 500, 7, year, 0).future_value
        assert result.yearly_data[year - 1].p50 == pytest.approx(expected, rel=1e-9)

    assert result.median_final == result.mean_final
    assert len(result.final_values) == 1


def test_zero_volatility_applies_inflation_per_year():
    result = run_monte_carlo_simulation(100000, 500, 7, 0, 3, 30, 500)

    band = result.yearly_data[9]
    expected = project(100000, 500, 7, 10, 0).future_value / 1.03 ** 10
    assert band.p90 == pytest.approx(expected, rel=1e-9)
    assert band.contributions == pytest.approx((100000 + 500 * 120) / 1.03 ** 10)


def test_zero_volatility_probabilities_are_binary():
    growing = run_deterministic_simulation(1000, 0, 7, 0, 30)
    assert growing.probability_of_doubling == 1
    assert growing.probability_of_loss == 0

    shrinking = run_deterministic_simulation(1000, 0, -5, 0, 10)
    assert shrinking.probability_of_doubling == 0
    assert shrinking.probability_of_loss == 1


def test_contributions_are_deterministic(seeded_rng):
    result = run_monte_carlo_simulation(1000, 100, 7, 15, 0, 3, 50, rng=seeded_rng)
    assert [b.contributions for b in result.yearly_data] == [2200, 3400, 4600]


def test_inflation_deflates_bands_not_probabilities():
    nominal = run_monte_carlo_simulation(20000, 200, 7, 15, 0, 20, 200, rng=np.random.default_rng(7))
    real = run_monte_carlo_simulation(20000, 200, 7, 15, 3, 20, 200, rng=np.random.default_rng(7))

    np.testing.assert_allclose(real.final_values, nominal.final_values)
    assert real.probability_of_doubling == nominal.probability_of_doubling
    assert real.probability_of_loss == nominal.probability_of_loss

    factor = 1.03 ** 20
    assert real.yearly_data[-1].p50 == pytest.approx(nominal.yearly_data[-1].p50 / factor)


def test_same_seed_is_reproducible():
    a = run_monte_carlo_simulation(10000, 100, 7, 15, 3, 10, 100, rng=np.random.default_rng(99))
    b = run_monte_carlo_simulation(10000, 100, 7, 15, 3, 10, 100, rng=np.random.default_rng(99))
    np.testing.assert_array_equal(a.final_values, b.final_values)


def test_config_seed_used_when_no_rng_injected():
    cfg = SimulationConfig(n_simulations=80, seed=3)
    a = run_monte_carlo_simulation(10000, 100, 7, 15, 0, 5, config=cfg)
    b = run_monte_carlo_simulation(10000, 100, 7, 15, 0, 5, config=cfg)

    assert len(a.final_values) == 80
    np.testing.assert_array_equal(a.final_values, b.final_values)


def test_accepts_plain_callable_rng():
    rng = np.random.default_rng(5)
    result = run_monte_carlo_simulation(10000, 100, 7, 15, 0, 5, 40, rng=rng.random)
    assert len(result.final_values) == 40


def test_higher_volatility_widens_spread():
    low = run_monte_carlo_simulation(100000, 0, 7, 5, 0, 10, 400, rng=np.random.default_rng(11))
    high = run_monte_carlo_simulation(100000, 0, 7, 25, 0, 10, 400, rng=np.random.default_rng(11))

    low_spread = low.yearly_data[-1].p90 - low.yearly_data[-1].p10
    high_spread = high.yearly_data[-1].p90 - high.yearly_data[-1].p10
    assert high_spread > low_spread


def test_rejects_invalid_arguments():
    with pytest.raises(ValueError):
        run_monte_carlo_simulation(1000, 0, 7, 15, 0, 5, 0)
    with pytest.raises(ValueError):
        run_monte_carlo_simulation(1000, 0, 7, 15, 0, 5, 10, rng=42)


def test_chart_rows_prepend_year_zero(seeded_rng):
    result = run_monte_carlo_simulation(5000, 50, 7, 15, 0, 4, 30, rng=seeded_rng)
    rows = result.chart_rows(5000)

    assert len(rows) == 5
    assert rows[0].year == 0
    assert rows[0].p10 == rows[0].p90 == rows[0].contributions == 5000


def test_to_dataframe_has_one_row_per_year(seeded_rng):
    df = run_monte_carlo_simulation(5000, 50, 7, 15, 0, 6, 30, rng=seeded_rng).to_dataframe()
    assert list(df.columns) == ["year", "p10", "p25", "p50", "p75", "p90", "contributions"]
    assert len(df) == 6
