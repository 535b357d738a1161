"""
Prior predictive simulation of logistic curve families with PyMC.

The functions in this module express the same curve family as `growthsim.simulate`
as a PyMC model: sampled parameters become random variables, fixed parameters stay
constants, and the curve itself is a deterministic over the time points. Drawing from
the prior predictive gives a batch with the same shape as `generate_batch`, useful to
check a curve family against the priors of a model before it is fit.

Draws are vectorized by PyMC, so for a given seed the curves differ from those of
`generate_batch`, which consumes its generator one curve at a time.
"""

__all__ = ("logistic_prior_model", "sample_prior_batch")


from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
import pandas as pd
import pymc as pm

from growthsim._util import _DEFAULT_TIME, _get_logger
from growthsim.curves import LogisticCurve
from growthsim.parameters import FixedParameter, ParameterSpec, ParameterSpecs
from growthsim.simulate import SimulationConfig


def logistic_prior_model(
    time: Sequence[float] | npt.NDArray[np.float64] | None = None,
    mid: ParameterSpec | float | None = None,
    asymptote: ParameterSpec | float | None = None,
    scale: ParameterSpec | float | None = None,
) -> pm.Model:
    """
    Construct a PyMC model of a logistic curve family.

    Args:
        time: The time points to evaluate the curve at or `None` for the integers -10
            through 10.
        mid: A fixed value or specification for the curve midpoint or `None` for the
            default of Normal(mu=0, sigma=3).
        asymptote: A fixed value or specification for the curve asymptote or `None`
            for the default of Beta(alpha=2, beta=1).
        scale: A fixed value or specification for the curve scale or `None` for the
            default of Normal(mu=2, sigma=0.5).

    Returns:
        A PyMC model with a random variable for each sampled parameter, named after
        the parameter, and a 'proportion' deterministic along the 'point' dimension.

    Examples:
        >>> from growthsim.prior import logistic_prior_model
        >>> model = logistic_prior_model(asymptote=0.7)
        >>> sorted(rv.name for rv in model.free_RVs)
        ['mid', 'scale']
        >>> len(model.coords["point"])
        21

    """
    specs = ParameterSpecs(mid=mid, asymptote=asymptote, scale=scale)
    t = np.asarray(_DEFAULT_TIME if time is None else time, dtype=np.float64)
    curve = LogisticCurve()
    with pm.Model(coords={"point": np.arange(len(t))}) as model:
        params = {
            name: spec.pymc_distribution(name)
            for name, spec in specs.parameter_specs().items()
        }
        pm.Deterministic(
            "proportion", curve.tensor_proportion(t, **params), dims="point"
        )
    return model


def sample_prior_batch(  # noqa: PLR0913
    n: int,
    time: Sequence[float] | npt.NDArray[np.float64] | None = None,
    mid: ParameterSpec | float | None = None,
    asymptote: ParameterSpec | float | None = None,
    scale: ParameterSpec | float | None = None,
    random_seed: int | np.random.Generator | None = None,
    debug: bool = False,
) -> pd.DataFrame:
    """
    Generate a batch of logistic curves from the PyMC prior predictive.

    Args:
        n: The number of curves to generate, must be a positive integer.
        time: The time points to evaluate each curve at or `None` for the integers
            -10 through 10.
        mid: A fixed value or specification for the curve midpoint or `None` for the
            default of Normal(mu=0, sigma=3).
        asymptote: A fixed value or specification for the curve asymptote or `None`
            for the default of Beta(alpha=2, beta=1).
        scale: A fixed value or specification for the curve scale or `None` for the
            default of Normal(mu=2, sigma=0.5).
        random_seed: The random seed passed to `pymc.sample_prior_predictive`.
        debug: Whether to output debugging information.

    Returns:
        A pandas DataFrame with the columns 'sim', 'time', 'proportion', 'asymptote',
        'scale', 'mid', and 'min_proportion', the same shape as `generate_batch`.

    Raises:
        ValueError: If `n` is not a positive integer or a parameter specification is
            invalid.

    """
    config = SimulationConfig(
        n=n,
        time=_DEFAULT_TIME if time is None else time,
        mid=mid,
        asymptote=asymptote,
        scale=scale,
        random_seed=random_seed,
    )
    logger = _get_logger(__name__, debug)
    logger.info(
        "Sampling %u curves over %u time points from the prior predictive.",
        config.n,
        len(config.time),
    )

    # Build and sample the model
    model = logistic_prior_model(
        time=config.time,
        mid=config.mid,
        asymptote=config.asymptote,
        scale=config.scale,
    )
    with model:
        idata = pm.sample_prior_predictive(
            draws=config.n, random_seed=config.random_seed
        )
    prior = idata.prior

    # Reshape the single chain of draws into one row per curve per time point
    n_time = len(config.time)
    proportion = np.asarray(prior["proportion"].values).reshape(config.n, n_time)
    values = {}
    for name, spec in config.parameter_specs().items():
        if isinstance(spec, FixedParameter):
            values[name] = np.full(config.n, spec.value)
        else:
            values[name] = np.asarray(prior[name].values).reshape(config.n)
        logger.debug(
            "Parameter '%s' has a prior mean of %g.", name, values[name].mean()
        )
    return pd.DataFrame(
        data={
            "sim": np.repeat(np.arange(1, config.n + 1), n_time),
            "time": np.tile(np.asarray(config.time, dtype=np.float64), config.n),
            "proportion": proportion.ravel(),
            "asymptote": np.repeat(values["asymptote"], n_time),
            "scale": np.repeat(values["scale"], n_time),
            "mid": np.repeat(values["mid"], n_time),
            "min_proportion": np.repeat(proportion.min(axis=1), n_time),
        }
    )
