import numpy as np
import pytest

from freqtab.errors import DomainError
from freqtab.stats.curve_fit import fit_exponential, fit_line, fit_parabola, fit_power


def test_fit_line_recovers_exact_line():
    x = np.array([1.0, 2.0, 3.0, 4.0])
    fit = fit_line(x, 3.0 + 0.5 * x)
    assert np.isclose(fit.a, 3.0)
    assert np.isclose(fit.b, 0.5)
    assert np.isclose(fit.r2, 1.0)
    assert len(fit.points()) == 4


def test_fit_parabola_recovers_coefficients():
    x = np.array([0.0, 1.0, 2.0, 3.0])
    fit = fit_parabola(x, 1.0 + 2.0 * x + 3.0 * x**2)
    assert np.isclose(fit.a, 1.0)
    assert np.isclose(fit.b, 2.0)
    assert np.isclose(fit.c, 3.0)
    assert np.allclose(fit.resid, 0.0, atol=1e-9)


def test_fit_parabola_needs_three_distinct_x():
    with pytest.raises(DomainError, match="three distinct"):
        fit_parabola([1.0, 1.0, 2.0], [1.0, 2.0, 3.0])
    with pytest.raises(DomainError, match="At least 3 points"):
        fit_parabola([1.0, 2.0], [1.0, 2.0])


def test_fit_exponential_recovers_exact_model():
    x = np.array([0.0, 1.0, 2.0, 3.0])
    fit = fit_exponential(x, 2.0 * np.exp(0.5 * x))
    assert np.isclose(fit.a, 2.0, atol=1e-9)
    assert np.isclose(fit.b, 0.5, atol=1e-9)
    assert np.isclose(fit.coefficients["ln_a"], np.log(2.0))


def test_fit_exponential_rejects_non_positive_y():
    with pytest.raises(DomainError, match="positive"):
        fit_exponential([1.0, 2.0, 3.0], [1.0, 0.0, 4.0])


def test_fit_power_recovers_exact_model():
    x = np.array([1.0, 2.0, 3.0, 4.0])
    fit = fit_power(x, 3.0 * x**1.5)
    assert np.isclose(fit.a, 3.0)
    assert np.isclose(fit.b, 1.5)
    assert np.allclose(fit.yhat, 3.0 * x**1.5)


def test_fit_power_rejects_non_positive_x():
    with pytest.raises(DomainError, match="every x"):
        fit_power([0.0, 1.0, 2.0], [1.0, 2.0, 3.0])
