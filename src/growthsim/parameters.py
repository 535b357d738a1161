"""
Parameter specifications for logistic curve families.

Each of the three logistic curve parameters, `mid`, `asymptote`, and `scale`, is
either held fixed or drawn fresh for every curve from a probability distribution.
This module provides the `FixedParameter` and `SampledParameter` specifications,
the reference default distributions, and `resolve_parameters` which turns a set of
specifications and a random generator into a concrete `CurveParameters` triple.

Distributions are named as in PyMC, e.g. `"Normal"` with `mu` and `sigma`, so the
same specification can be sampled directly with numpy or placed in a PyMC model.
"""

__all__ = (
    "DEFAULT_PARAMETER_SPECS",
    "CurveParameters",
    "FixedParameter",
    "ParameterSpec",
    "ParameterSpecLike",
    "ParameterSpecs",
    "SampledParameter",
    "resolve_parameters",
)


import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from numbers import Real
from types import MappingProxyType
from typing import Annotated, Any, Final

import numpy as np
import pymc as pm
from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

_PARAMETER_NAMES: Final = ("mid", "asymptote", "scale")


def _normal(
    generator: np.random.Generator, mu: float = 0.0, sigma: float = 1.0
) -> float:
    return float(generator.normal(loc=mu, scale=sigma))


def _half_normal(generator: np.random.Generator, sigma: float = 1.0) -> float:
    return float(abs(generator.normal(loc=0.0, scale=sigma)))


def _log_normal(
    generator: np.random.Generator, mu: float = 0.0, sigma: float = 1.0
) -> float:
    return float(generator.lognormal(mean=mu, sigma=sigma))


def _beta(generator: np.random.Generator, alpha: float, beta: float) -> float:
    return float(generator.beta(a=alpha, b=beta))


def _gamma(generator: np.random.Generator, alpha: float, beta: float) -> float:
    # PyMC parameterizes the gamma by rate, numpy by scale.
    return float(generator.gamma(shape=alpha, scale=1.0 / beta))


def _uniform(
    generator: np.random.Generator, lower: float = 0.0, upper: float = 1.0
) -> float:
    return float(generator.uniform(low=lower, high=upper))


def _exponential(generator: np.random.Generator, lam: float) -> float:
    return float(generator.exponential(scale=1.0 / lam))


_SAMPLERS: Final[Mapping[str, Callable[..., float]]] = MappingProxyType(
    {
        "Beta": _beta,
        "Exponential": _exponential,
        "Gamma": _gamma,
        "HalfNormal": _half_normal,
        "LogNormal": _log_normal,
        "Normal": _normal,
        "Uniform": _uniform,
    }
)


class CurveParameters(BaseModel):
    """
    A resolved set of logistic curve parameters.

    Examples:
        >>> from growthsim.parameters import CurveParameters
        >>> CurveParameters(mid=0.0, asymptote=1.0, scale=1.0)
        CurveParameters(mid=0.0, asymptote=1.0, scale=1.0)

    """

    model_config = ConfigDict(frozen=True)

    #: The time at which the curve changes fastest.
    mid: float

    #: The value the curve approaches as time grows large.
    asymptote: float

    #: The steepness of the curve, negative values give decreasing curves.
    scale: float


class ParameterSpec(ABC, BaseModel):
    """Abstract class for the specification of a single curve parameter."""

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def resolve(self, generator: np.random.Generator) -> float:
        """
        Resolve this specification to a single value.

        Args:
            generator: The random generator to draw from, if needed.

        Returns:
            The resolved parameter value.

        """
        raise NotImplementedError

    @abstractmethod
    def pymc_distribution(self, name: str) -> pm.Distribution | float:
        """
        Return this specification as a PyMC model component.

        Args:
            name: The name of the parameter in the PyMC model.

        Returns:
            Either a PyMC random variable or a constant.

        """
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> str:
        """Return a short human readable description of this specification."""
        raise NotImplementedError


class FixedParameter(ParameterSpec):
    """
    A curve parameter held at a fixed value.

    Attributes:
        value: The value of the parameter, any real value is accepted.

    Examples:
        >>> import numpy as np
        >>> from growthsim.parameters import FixedParameter
        >>> spec = FixedParameter(value=0.7)
        >>> spec.resolve(np.random.default_rng(1))
        0.7
        >>> spec.describe()
        'fixed at 0.7'

    """

    value: float

    def resolve(self, generator: np.random.Generator) -> float:
        """
        Resolve this specification without touching the random generator.

        Args:
            generator: Unused, present for compatibility with sampled parameters.

        Returns:
            The fixed value.

        """
        return self.value

    def pymc_distribution(self, name: str) -> float:
        return self.value

    def describe(self) -> str:
        return f"fixed at {self.value}"


class SampledParameter(ParameterSpec):
    """
    A curve parameter drawn from a probability distribution.

    Attributes:
        distribution: The name of the distribution family as in PyMC, one of 'Beta',
            'Exponential', 'Gamma', 'HalfNormal', 'LogNormal', 'Normal', or
            'Uniform'.
        distribution_kwargs: The keyword arguments for the distribution using the
            PyMC argument names, e.g. `mu` and `sigma` for 'Normal'.

    Examples:
        >>> from growthsim.parameters import SampledParameter
        >>> spec = SampledParameter(
        ...     distribution="Beta", distribution_kwargs={"alpha": 2.0, "beta": 1.0}
        ... )
        >>> spec.describe()
        'drawn from Beta(alpha=2.0, beta=1.0)'
        >>> SampledParameter(distribution="Cauchy")  # doctest: +ELLIPSIS
        Traceback (most recent call last):
            ...
        pydantic_core._pydantic_core.ValidationError: 1 validation error for SampledParameter
        distribution
          Value error, Unsupported distribution 'Cauchy', must be one of 'Beta', ...

    """  # noqa: E501

    distribution: str
    distribution_kwargs: dict[str, float] = Field(default_factory=dict)

    @field_validator("distribution", mode="after")
    @classmethod
    def _is_distribution_supported(cls, distribution: str) -> str:
        if distribution not in _SAMPLERS:
            msg = (
                f"Unsupported distribution '{distribution}', must be one of "
                f"""'{"', '".join(_SAMPLERS)}'."""
            )
            raise ValueError(msg)
        return distribution

    @model_validator(mode="after")
    def _are_distribution_kwargs_valid(self) -> "SampledParameter":
        """
        Validate the keyword arguments against the distribution family.

        Returns:
            The validated SampledParameter instance.

        Raises:
            ValueError: If the keyword arguments are unknown to the distribution or
                required keyword arguments are missing.
        """
        signature = inspect.signature(_SAMPLERS[self.distribution])
        try:
            signature.bind(None, **self.distribution_kwargs)
        except TypeError as e:
            msg = (
                f"Invalid keyword arguments for the '{self.distribution}' "
                f"distribution, {e}."
            )
            raise ValueError(msg) from e
        return self

    def resolve(self, generator: np.random.Generator) -> float:
        """
        Draw one value from the distribution.

        Args:
            generator: The random generator to draw from, its state is advanced.

        Returns:
            The sampled value.

        Raises:
            ValueError: If numpy rejects the distribution parameters, e.g. a negative
                standard deviation.

        """
        return _SAMPLERS[self.distribution](generator, **self.distribution_kwargs)

    def pymc_distribution(self, name: str) -> pm.Distribution:
        """
        Return a PyMC random variable for this parameter.

        Args:
            name: The name of the random variable, must be called within a model
                context.

        Returns:
            The PyMC random variable.

        """
        return getattr(pm, self.distribution)(name=name, **self.distribution_kwargs)

    def describe(self) -> str:
        kwargs = ", ".join(f"{k}={v}" for k, v in self.distribution_kwargs.items())
        return f"drawn from {self.distribution}({kwargs})"


#: The reference distributions used for parameters that are not specified.
DEFAULT_PARAMETER_SPECS: Final[Mapping[str, SampledParameter]] = MappingProxyType(
    {
        "mid": SampledParameter(
            distribution="Normal", distribution_kwargs={"mu": 0.0, "sigma": 3.0}
        ),
        "asymptote": SampledParameter(
            distribution="Beta", distribution_kwargs={"alpha": 2.0, "beta": 1.0}
        ),
        "scale": SampledParameter(
            distribution="Normal", distribution_kwargs={"mu": 2.0, "sigma": 0.5}
        ),
    }
)


def _make_parameter_spec(x: Any) -> Any:  # noqa: ANN401
    """
    Utility function to make a parameter specification from shorthand values.

    Args:
        x: A number for a fixed parameter, a mapping with a 'distribution' key for a
            sampled parameter, or a specification which is returned as is.

    Returns:
        The parameter specification or the original value.

    Examples:
        >>> from growthsim.parameters import _make_parameter_spec
        >>> _make_parameter_spec(0.7)
        FixedParameter(value=0.7)
        >>> _make_parameter_spec(
        ...     {"distribution": "Normal", "distribution_kwargs": {"sigma": 3.0}}
        ... )
        SampledParameter(distribution='Normal', distribution_kwargs={'sigma': 3.0})
        >>> _make_parameter_spec("abc")
        'abc'
    """
    if isinstance(x, Real):
        return FixedParameter(value=float(x))
    if isinstance(x, Mapping) and "distribution" in x:
        return SampledParameter.model_validate(dict(x))
    if isinstance(x, Mapping) and "value" in x:
        return FixedParameter.model_validate(dict(x))
    return x


ParameterSpecLike = Annotated[
    FixedParameter | SampledParameter, BeforeValidator(_make_parameter_spec)
]


class ParameterSpecs(BaseModel):
    """
    The specifications for all three logistic curve parameters.

    Parameters given as `None`, or not given at all, use the reference defaults in
    `DEFAULT_PARAMETER_SPECS`.

    Examples:
        >>> from growthsim.parameters import ParameterSpecs
        >>> specs = ParameterSpecs(mid=0.0, asymptote=None)
        >>> specs.mid
        FixedParameter(value=0.0)
        >>> specs.asymptote.describe()
        'drawn from Beta(alpha=2.0, beta=1.0)'
        >>> list(specs.parameter_specs())
        ['mid', 'asymptote', 'scale']

    """

    model_config = ConfigDict(frozen=True)

    mid: ParameterSpecLike = DEFAULT_PARAMETER_SPECS["mid"]
    asymptote: ParameterSpecLike = DEFAULT_PARAMETER_SPECS["asymptote"]
    scale: ParameterSpecLike = DEFAULT_PARAMETER_SPECS["scale"]

    @model_validator(mode="before")
    @classmethod
    def _drop_unset_parameters(cls, data: Any) -> Any:  # noqa: ANN401
        if isinstance(data, dict):
            return {
                k: v
                for k, v in data.items()
                if not (k in _PARAMETER_NAMES and v is None)
            }
        return data

    def parameter_specs(self) -> dict[str, FixedParameter | SampledParameter]:
        """
        Get the parameter specifications in resolution order.

        Returns:
            A dictionary of parameter names to specifications ordered `mid`,
            `asymptote`, then `scale`.
        """
        return {name: getattr(self, name) for name in _PARAMETER_NAMES}

    def resolve(self, generator: np.random.Generator) -> CurveParameters:
        """
        Resolve the specifications into a single set of curve parameters.

        Args:
            generator: The random generator to draw sampled parameters from.

        Returns:
            The resolved curve parameters.

        Notes:
            Parameters are resolved in the order `mid`, `asymptote`, then `scale` and
            only sampled parameters advance the generator, so a seeded generator
            yields a reproducible stream of draws.
        """
        return CurveParameters(
            **{
                name: spec.resolve(generator)
                for name, spec in self.parameter_specs().items()
            }
        )


def resolve_parameters(
    mid: ParameterSpec | float | None = None,
    asymptote: ParameterSpec | float | None = None,
    scale: ParameterSpec | float | None = None,
    generator: np.random.Generator | None = None,
) -> CurveParameters:
    """
    Resolve parameter specifications into one set of curve parameters.

    Args:
        mid: The specification for the curve midpoint or `None` for the default of
            Normal(mu=0, sigma=3).
        asymptote: The specification for the curve asymptote or `None` for the
            default of Beta(alpha=2, beta=1).
        scale: The specification for the curve scale or `None` for the default of
            Normal(mu=2, sigma=0.5).
        generator: The random generator to draw from or `None` to use a fresh
            unseeded generator.

    Returns:
        The resolved curve parameters.

    Examples:
        >>> from growthsim.parameters import resolve_parameters
        >>> resolve_parameters(mid=0.0, asymptote=1.0, scale=1.0)
        CurveParameters(mid=0.0, asymptote=1.0, scale=1.0)
        >>> import numpy as np
        >>> parameters = resolve_parameters(
        ...     asymptote=0.7, generator=np.random.default_rng(1)
        ... )
        >>> parameters.asymptote
        0.7

    """
    if generator is None:
        generator = np.random.default_rng()
    specs = ParameterSpecs(mid=mid, asymptote=asymptote, scale=scale)
    return specs.resolve(generator)
