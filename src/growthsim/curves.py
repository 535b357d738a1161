"""
Logistic growth curves.

This module provides the curve engine. The abstract base class `Curve` defines the
interface for sigmoid curve families, `LogisticCurve` implements the three parameter
logistic curve, and `evaluate_curve` evaluates a resolved parameter triple over a
grid of time points producing one row per time point.
"""

__all__ = (
    "CURVE_POINT_COLUMNS",
    "Curve",
    "CurvePoint",
    "LogisticCurve",
    "curve_points",
    "evaluate_curve",
)


from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Final, TypedDict, cast

import numpy as np
import numpy.typing as npt
import pandas as pd
import pymc as pm
import pytensor.tensor as pt

from growthsim._util import _DEFAULT_TIME
from growthsim.parameters import CurveParameters

#: The columns of a curve, in order, one row per time point.
CURVE_POINT_COLUMNS: Final = (
    "time",
    "proportion",
    "asymptote",
    "scale",
    "mid",
    "min_proportion",
)


class CurvePoint(TypedDict):
    time: float
    proportion: float
    asymptote: float
    scale: float
    mid: float
    min_proportion: float


class Curve(ABC):
    """Abstract class for implementations of growth curves."""

    @property
    @abstractmethod
    def parameters(self) -> tuple[str, ...]:
        """
        Return the set of parameters used by this curve model.

        Returns:
            The set of parameter names as strings.

        Notes:
            The parameter names must be fields of `CurveParameters` so resolved
            parameters can be passed straight to `proportion`.

        """
        raise NotImplementedError

    @abstractmethod
    def proportion(
        self, t: npt.NDArray[np.float64], **kwargs: float
    ) -> npt.NDArray[np.float64]:
        """
        Evaluate the curve at given set of time steps.

        Args:
            t: The time steps to evaluate the curve at.
            kwargs: Further keyword arguments, must be the parameters for this model as
                described by the `parameters` attribute.

        Returns:
            The curve at the time steps provided.

        """
        raise NotImplementedError

    @abstractmethod
    def tensor_proportion(
        self,
        t: npt.NDArray[np.float64],
        **kwargs: pt.variable.TensorVariable | float,
    ) -> pt.variable.TensorVariable:
        """
        Symbolically evaluate the curve at given set of time steps.

        Args:
            t: The time steps to evaluate the curve at.
            kwargs: Further keyword arguments, must be the parameters for this model as
                described by the `parameters` attribute, either PyMC random variables
                or constants.

        Returns:
            A tensor of the curve at the time steps provided.

        """
        raise NotImplementedError


class LogisticCurve(Curve):
    r"""
    Logistic growth curve.

    This class implements a logistic curve with parameters :math:`m` (mid),
    :math:`a` (asymptote), and :math:`s` (scale) which is given by:

    .. math::

        f(t\vert m,a,s)=\frac{a}{1+e^{\left(m-t\right)/s}}

    No clamping is applied, so the curve may leave :math:`[0, 1]` depending on the
    asymptote.

    """

    #: The names of parameters used by this curve model.
    parameters = ("mid", "asymptote", "scale")

    def proportion(
        self, t: npt.NDArray[np.float64], **kwargs: float
    ) -> npt.NDArray[np.float64]:
        """
        Evaluate the logistic curve at given set of time steps.

        Args:
            t: The time steps to evaluate the curve at.
            kwargs: Further keyword arguments, must be the parameters for this model as
                described by the `parameters` attribute.

        Returns:
            The logistic curve at the time steps provided.

        Notes:
            Standard floating point semantics apply. In particular a scale of zero
            gives zero before the midpoint, the asymptote after it, and NaN exactly at
            the midpoint.

        Examples:
            >>> import numpy as np
            >>> from growthsim.curves import LogisticCurve
            >>> curve = LogisticCurve()
            >>> curve.proportion(np.array([0.0]), mid=0.0, asymptote=1.0, scale=1.0)
            array([0.5])
            >>> curve.proportion(
            ...     np.array([-5.0, 0.0, 5.0]), mid=0.0, asymptote=1.0, scale=0.0
            ... )
            array([ 0., nan,  1.])

        """
        t = np.asarray(t, dtype=np.float64)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return cast(
                "npt.NDArray[np.float64]",
                kwargs["asymptote"]
                / (1.0 + np.exp((kwargs["mid"] - t) / kwargs["scale"])),
            )

    def tensor_proportion(
        self,
        t: npt.NDArray[np.float64],
        **kwargs: pt.variable.TensorVariable | float,
    ) -> pt.variable.TensorVariable:
        """
        Symbolically evaluate the logistic curve at given set of time steps.

        Args:
            t: The time steps to evaluate the curve at.
            kwargs: Further keyword arguments, must be the parameters for this model as
                described by the `parameters` attribute.

        Returns:
            A tensor of the logistic curve at the time steps provided.

        """
        t_tensor = pt.as_tensor_variable(np.asarray(t, dtype=np.float64))
        return cast(
            "pt.variable.TensorVariable",
            kwargs["asymptote"]
            / (1.0 + pm.math.exp((kwargs["mid"] - t_tensor) / kwargs["scale"])),
        )


def curve_points(
    parameters: CurveParameters,
    time: Sequence[float] | npt.NDArray[np.float64] | None = None,
    curve: Curve | None = None,
) -> list[CurvePoint]:
    """
    Evaluate a curve and return its points as records.

    Args:
        parameters: The resolved curve parameters.
        time: The time points to evaluate the curve at or `None` for the integers -10
            through 10.
        curve: The curve family to use or `None` for a `LogisticCurve`.

    Returns:
        One record per time point, in the order of `time`, each carrying the curve
        parameters and the minimum proportion across the whole curve.

    Raises:
        ValueError: If `time` is empty or not one dimensional.

    """
    curve = LogisticCurve() if curve is None else curve
    t = np.asarray(_DEFAULT_TIME if time is None else time, dtype=np.float64)
    if t.ndim != 1 or not len(t):
        msg = "The time points must be a non-empty one dimensional sequence."
        raise ValueError(msg)
    values = parameters.model_dump()
    proportion = curve.proportion(t, **{p: values[p] for p in curve.parameters})
    # Any NaN proportion makes the minimum NaN.
    min_proportion = float(np.min(proportion))
    return [
        CurvePoint(
            time=float(ti),
            proportion=float(yi),
            asymptote=parameters.asymptote,
            scale=parameters.scale,
            mid=parameters.mid,
            min_proportion=min_proportion,
        )
        for ti, yi in zip(t, proportion)
    ]


def evaluate_curve(
    parameters: CurveParameters,
    time: Sequence[float] | npt.NDArray[np.float64] | None = None,
    curve: Curve | None = None,
) -> pd.DataFrame:
    """
    Evaluate a curve for a resolved set of parameters.

    Args:
        parameters: The resolved curve parameters.
        time: The time points to evaluate the curve at or `None` for the integers -10
            through 10.
        curve: The curve family to use or `None` for a `LogisticCurve`.

    Returns:
        A pandas DataFrame with the columns 'time', 'proportion', 'asymptote',
        'scale', 'mid', and 'min_proportion' with one row per time point.

    Examples:
        >>> from growthsim.curves import evaluate_curve
        >>> from growthsim.parameters import CurveParameters
        >>> parameters = CurveParameters(mid=0.0, asymptote=1.0, scale=1.0)
        >>> curve = evaluate_curve(parameters)
        >>> curve.shape
        (21, 6)
        >>> curve.columns.tolist()
        ['time', 'proportion', 'asymptote', 'scale', 'mid', 'min_proportion']
        >>> float(curve.loc[curve["time"] == 0.0, "proportion"].iloc[0])
        0.5
        >>> evaluate_curve(parameters, time=[])
        Traceback (most recent call last):
            ...
        ValueError: The time points must be a non-empty one dimensional sequence.

    """
    return pd.DataFrame.from_records(
        curve_points(parameters, time=time, curve=curve),
        columns=list(CURVE_POINT_COLUMNS),
    )
