"""
Simulate batches of logistic growth curves.

This module provides the batch driver which repeatedly resolves parameter
specifications and evaluates the resulting curves, tagging every curve with a 1-based
`sim` identifier. All curves in a batch share one random generator so a seeded batch
is reproducible draw for draw. Current exported functionality includes:
- `SimulationConfig`
- `generate_batch`
- `generate_curve`
- `summarize_batch`
"""

__all__ = (
    "SimulationConfig",
    "generate_batch",
    "generate_curve",
    "summarize_batch",
)


from collections.abc import Sequence
from typing import Annotated, Any

import numpy as np
import numpy.typing as npt
import pandas as pd
from pydantic import ConfigDict, Field

from growthsim._util import _DEFAULT_TIME, CurveCount, TimeGrid, _get_logger
from growthsim.curves import CURVE_POINT_COLUMNS, Curve, curve_points
from growthsim.parameters import ParameterSpec, ParameterSpecs

_BATCH_COLUMNS = ("sim", *CURVE_POINT_COLUMNS)


class SimulationConfig(ParameterSpecs):
    """
    A representation of a batch simulation of logistic curves.

    Examples:
        >>> from growthsim.simulate import SimulationConfig
        >>> config = SimulationConfig.model_validate(
        ...     {
        ...         "n": 3,
        ...         "time": [0, 1, 2],
        ...         "asymptote": 0.7,
        ...         "random_seed": 42,
        ...     }
        ... )
        >>> config.time
        (0.0, 1.0, 2.0)
        >>> config.asymptote
        FixedParameter(value=0.7)
        >>> config.generate().shape
        (9, 7)
        >>> SimulationConfig(n=0)  # doctest: +ELLIPSIS
        Traceback (most recent call last):
            ...
        pydantic_core._pydantic_core.ValidationError: 1 validation error for SimulationConfig
        n
          Input should be greater than 0 ...

    """  # noqa: E501

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    #: The number of curves to generate.
    n: CurveCount = 1

    #: The time points to evaluate each curve at.
    time: TimeGrid = _DEFAULT_TIME

    #: The random seed, an existing generator to advance, or `None` for unseeded.
    random_seed: Annotated[int, Field(ge=0)] | np.random.Generator | None = None

    def generate(self, debug: bool = False, curve: Curve | None = None) -> pd.DataFrame:
        """
        Generate the batch of curves described by this configuration.

        Args:
            debug: Whether to output debugging information as curves are generated.
            curve: The curve family to use or `None` for a `LogisticCurve`.

        Returns:
            A pandas DataFrame with the columns 'sim', 'time', 'proportion',
            'asymptote', 'scale', 'mid', and 'min_proportion' with one row per curve
            per time point, ordered by 'sim' and then by time point order.

        Raises:
            ValueError: If sampling a parameter fails, e.g. due to a negative standard
                deviation. No partial batch is returned.

        """
        # Get the logger
        logger = _get_logger(__name__, debug)
        logger.info(
            "Generating %u curves over %u time points.", self.n, len(self.time)
        )
        for name, spec in self.parameter_specs().items():
            logger.info("Parameter '%s' is %s.", name, spec.describe())

        # Draws are consumed in curve order from a single generator
        generator = np.random.default_rng(self.random_seed)
        records: list[dict[str, Any]] = []
        for sim in range(1, self.n + 1):
            parameters = self.resolve(generator)
            logger.debug(
                "Resolved curve %u with mid=%g, asymptote=%g, scale=%g.",
                sim,
                parameters.mid,
                parameters.asymptote,
                parameters.scale,
            )
            points = curve_points(parameters, time=self.time, curve=curve)
            if outside := sum(not 0.0 <= p["proportion"] <= 1.0 for p in points):
                logger.info(
                    "Curve %u has %u proportions outside of [0, 1].", sim, outside
                )
            records.extend({"sim": sim, **point} for point in points)
        return pd.DataFrame.from_records(records, columns=list(_BATCH_COLUMNS))


def generate_batch(  # noqa: PLR0913
    n: int,
    time: Sequence[float] | npt.NDArray[np.float64] | None = None,
    mid: ParameterSpec | float | None = None,
    asymptote: ParameterSpec | float | None = None,
    scale: ParameterSpec | float | None = None,
    random_seed: int | np.random.Generator | None = None,
    debug: bool = False,
) -> pd.DataFrame:
    """
    Generate a batch of independent logistic curves.

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
        random_seed: The random seed to use for reproducibility, an existing
            generator to draw from, or `None` for non-reproducible draws.
        debug: Whether to output debugging information as curves are generated.

    Returns:
        A pandas DataFrame with the columns 'sim', 'time', 'proportion', 'asymptote',
        'scale', 'mid', and 'min_proportion' with one row per curve per time point.

    Raises:
        ValueError: If `n` is not a positive integer, a parameter specification is
            invalid, or sampling a parameter fails.

    Examples:
        >>> from growthsim.simulate import generate_batch
        >>> batch = generate_batch(40, random_seed=1)
        >>> batch.shape
        (840, 7)
        >>> batch["sim"].nunique()
        40
        >>> batch.groupby("sim").size().unique().tolist()
        [21]
        >>> bool((generate_batch(5, asymptote=0.7)["asymptote"] == 0.7).all())
        True

    """
    config = SimulationConfig(
        n=n,
        time=_DEFAULT_TIME if time is None else time,
        mid=mid,
        asymptote=asymptote,
        scale=scale,
        random_seed=random_seed,
    )
    return config.generate(debug=debug)


def generate_curve(  # noqa: PLR0913
    mid: ParameterSpec | float | None = None,
    asymptote: ParameterSpec | float | None = None,
    scale: ParameterSpec | float | None = None,
    time: Sequence[float] | npt.NDArray[np.float64] | None = None,
    random_seed: int | np.random.Generator | None = None,
    debug: bool = False,
) -> pd.DataFrame:
    """
    Generate a single logistic curve.

    Args:
        mid: A fixed value or specification for the curve midpoint or `None` for the
            default of Normal(mu=0, sigma=3).
        asymptote: A fixed value or specification for the curve asymptote or `None`
            for the default of Beta(alpha=2, beta=1).
        scale: A fixed value or specification for the curve scale or `None` for the
            default of Normal(mu=2, sigma=0.5).
        time: The time points to evaluate the curve at or `None` for the integers -10
            through 10.
        random_seed: The random seed to use for reproducibility, an existing
            generator to draw from, or `None` for non-reproducible draws.
        debug: Whether to output debugging information.

    Returns:
        A pandas DataFrame with the columns 'time', 'proportion', 'asymptote',
        'scale', 'mid', and 'min_proportion' with one row per time point.

    Examples:
        >>> from growthsim.simulate import generate_curve
        >>> curve = generate_curve(
        ...     mid=0.0, asymptote=1.0, scale=0.0, time=[-5.0, 0.0, 5.0]
        ... )
        >>> curve["proportion"].tolist()
        [0.0, nan, 1.0]

    """
    batch = generate_batch(
        1,
        time=time,
        mid=mid,
        asymptote=asymptote,
        scale=scale,
        random_seed=random_seed,
        debug=debug,
    )
    return batch.drop(columns="sim")


def summarize_batch(batch: pd.DataFrame) -> pd.DataFrame:
    """
    Summarize a batch of curves with one row per curve.

    Args:
        batch: A batch of curves as returned by `generate_batch`.

    Returns:
        A pandas DataFrame with the columns 'sim', 'mid', 'asymptote', 'scale',
        'min_proportion', 'max_proportion', and 'crosses_bounds' where the last
        column flags curves with any proportion outside of [0, 1] or undefined.

    Raises:
        ValueError: If `batch` is missing required columns.

    Examples:
        >>> from growthsim.simulate import generate_batch, summarize_batch
        >>> batch = generate_batch(
        ...     2, time=[-1.0, 0.0, 1.0], mid=0.0, asymptote=1.0, scale=1.0
        ... )
        >>> summary = summarize_batch(batch)
        >>> summary.columns.tolist()
        ['sim', 'mid', 'asymptote', 'scale', 'min_proportion', 'max_proportion', 'crosses_bounds']
        >>> summary["sim"].tolist()
        [1, 2]
        >>> summary["crosses_bounds"].tolist()
        [False, False]

    """  # noqa: E501
    if missing_columns := set(_BATCH_COLUMNS) - set(batch.columns):
        msg = (
            "The `batch` provided is missing required columns: "
            f"""'{"', '".join(sorted(missing_columns))}'."""
        )
        raise ValueError(msg)
    grouped = batch.groupby("sim", sort=False)
    summary = grouped.agg(
        mid=("mid", "first"),
        asymptote=("asymptote", "first"),
        scale=("scale", "first"),
        min_proportion=("min_proportion", "first"),
        max_proportion=("proportion", lambda p: p.max(skipna=False)),
    )
    summary["crosses_bounds"] = (
        grouped["proportion"]
        .agg(lambda p: bool((~p.between(0.0, 1.0)).any()))
        .astype(bool)
    )
    return summary.reset_index()
