__all__: tuple[str, ...] = ()


import logging
from numbers import Integral, Real
from typing import Annotated, Any, Final, overload

import numpy as np
from pydantic import BeforeValidator, Field

_DEFAULT_TIME: Final[tuple[float, ...]] = tuple(float(t) for t in range(-10, 11))
_LOG_FORMAT: Final = "%(levelname)s: %(message)s"


@overload
def _make_float_tuple(x: float) -> tuple[float, ...]: ...


@overload
def _make_float_tuple(x: Any) -> Any: ...  # noqa: ANN401


def _make_float_tuple(x: float | Any) -> tuple[float, ...] | Any:
    """
    Utility function to make a tuple of floats from a scalar, sequence or array.

    Args:
        x: The value to convert, non-numeric elements are left as is for downstream
            validation to reject.

    Returns:
        The float tuple or the original value if it is not a scalar or iterable.

    Examples:
        >>> import numpy as np
        >>> from growthsim._util import _make_float_tuple
        >>> _make_float_tuple(1.5)
        (1.5,)
        >>> _make_float_tuple(3)
        (3.0,)
        >>> _make_float_tuple([1, 2.5])
        (1.0, 2.5)
        >>> _make_float_tuple(np.arange(-1, 2))
        (-1.0, 0.0, 1.0)
        >>> _make_float_tuple(range(2))
        (0.0, 1.0)
        >>> _make_float_tuple("abc")
        'abc'
        >>> _make_float_tuple(None) is None
        True
    """
    if isinstance(x, Real):
        return (float(x),)
    if isinstance(x, np.ndarray):
        x = x.ravel().tolist()
    if isinstance(x, list | tuple | range):
        return tuple(float(v) if isinstance(v, Real) else v for v in x)
    return x


def _validate_count(x: Any) -> int:  # noqa: ANN401
    """
    Validate that a number of curves is an integer without coercing it.

    Args:
        x: The candidate number of curves.

    Returns:
        The number of curves as a built-in integer.

    Raises:
        ValueError: If `x` is a boolean or not an integral number.

    Examples:
        >>> import numpy as np
        >>> from growthsim._util import _validate_count
        >>> _validate_count(40)
        40
        >>> _validate_count(np.int64(3))
        3
        >>> _validate_count(2.0)
        Traceback (most recent call last):
            ...
        ValueError: The number of curves must be an integer, got 2.0.
    """
    if isinstance(x, bool) or not isinstance(x, Integral):
        msg = f"The number of curves must be an integer, got {x!r}."
        raise ValueError(msg)
    return int(x)


TimeGrid = Annotated[
    tuple[float, ...], BeforeValidator(_make_float_tuple), Field(min_length=1)
]
CurveCount = Annotated[int, BeforeValidator(_validate_count), Field(gt=0)]


def _get_logger(name: str, debug: bool) -> logging.Logger:
    """
    Get a module logger that is either verbose or silent.

    Args:
        name: The name of the logger, typically the module `__name__`.
        debug: Whether to output debugging information, otherwise the logger is
            muted entirely.

    Returns:
        The configured logger with a single stream handler attached.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.CRITICAL + 1)
    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(stream_handler)
    return logger
