"""Unit tests for `growthsim.parameters.SampledParameter`."""

from typing import Any

import numpy as np
import pytest
from pydantic import ValidationError

from growthsim.parameters import SampledParameter


@pytest.mark.parametrize("distribution", ("Cauchy", "normal", "StudentT", ""))
def test_unsupported_distribution_value_error(distribution: str) -> None:
    """Unsupported distribution families raise a value error."""
    with pytest.raises(
        ValidationError, match=f"Unsupported distribution '{distribution}'"
    ):
        SampledParameter(distribution=distribution)


@pytest.mark.parametrize(
    ("distribution", "distribution_kwargs"),
    (
        ("Normal", {"loc": 0.0, "scale": 1.0}),
        ("Beta", {"alpha": 2.0}),
        ("Beta", {}),
        ("Uniform", {"low": 0.0}),
        ("Exponential", {}),
    ),
)
def test_invalid_distribution_kwargs_value_error(
    distribution: str, distribution_kwargs: dict[str, float]
) -> None:
    """Unknown or missing keyword arguments raise a value error."""
    with pytest.raises(
        ValidationError,
        match=f"Invalid keyword arguments for the '{distribution}' distribution",
    ):
        SampledParameter(
            distribution=distribution, distribution_kwargs=distribution_kwargs
        )


@pytest.mark.parametrize(
    ("distribution", "distribution_kwargs", "expected"),
    (
        ("Normal", {"mu": 0.0, "sigma": 3.0}, lambda g: g.normal(loc=0.0, scale=3.0)),
        ("Beta", {"alpha": 2.0, "beta": 1.0}, lambda g: g.beta(a=2.0, b=1.0)),
        ("Normal", {}, lambda g: g.normal(loc=0.0, scale=1.0)),
        (
            "Uniform",
            {"lower": -1.0, "upper": 3.0},
            lambda g: g.uniform(low=-1.0, high=3.0),
        ),
        (
            "Gamma",
            {"alpha": 2.0, "beta": 4.0},
            lambda g: g.gamma(shape=2.0, scale=0.25),
        ),
        ("Exponential", {"lam": 2.0}, lambda g: g.exponential(scale=0.5)),
        ("LogNormal", {"sigma": 0.5}, lambda g: g.lognormal(mean=0.0, sigma=0.5)),
        ("HalfNormal", {"sigma": 2.0}, lambda g: abs(g.normal(loc=0.0, scale=2.0))),
    ),
)
def test_resolve_matches_numpy_draw(
    distribution: str, distribution_kwargs: dict[str, float], expected: Any
) -> None:
    """Each family draws exactly one value with the equivalent numpy call."""
    spec = SampledParameter(
        distribution=distribution, distribution_kwargs=distribution_kwargs
    )
    value = spec.resolve(np.random.default_rng(123))
    assert isinstance(value, float)
    assert value == float(expected(np.random.default_rng(123)))


def test_resolve_advances_generator() -> None:
    """Consecutive draws from one generator differ."""
    spec = SampledParameter(
        distribution="Normal", distribution_kwargs={"mu": 0.0, "sigma": 1.0}
    )
    generator = np.random.default_rng(5)
    assert spec.resolve(generator) != spec.resolve(generator)


@pytest.mark.parametrize(
    ("distribution", "distribution_kwargs"),
    (
        ("Normal", {"mu": 0.0, "sigma": -1.0}),
        ("Beta", {"alpha": 0.0, "beta": 1.0}),
        ("Beta", {"alpha": 2.0, "beta": -1.0}),
        ("LogNormal", {"sigma": -0.5}),
    ),
)
def test_invalid_distribution_parameters_raise_on_resolve(
    distribution: str, distribution_kwargs: dict[str, float]
) -> None:
    """Invalid distribution parameters surface as a value error when sampled."""
    spec = SampledParameter(
        distribution=distribution, distribution_kwargs=distribution_kwargs
    )
    with pytest.raises(ValueError):
        spec.resolve(np.random.default_rng(0))
