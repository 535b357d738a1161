"""Unit tests for the `growthsim._util._make_float_tuple` helper and `TimeGrid`."""

from typing import Any

import numpy as np
import pytest
from pydantic import BaseModel, ValidationError

from growthsim._util import TimeGrid, _make_float_tuple


class TimeGridTestModel(BaseModel):
    """
    Test model for the `TimeGrid` pydantic type.

    Attributes:
        time: The time points.
    """

    time: TimeGrid


@pytest.mark.parametrize(
    ("values", "expected"),
    (
        (1.5, (1.5,)),
        (3, (3.0,)),
        ([1, 2.5], (1.0, 2.5)),
        ((-1.0, 0.0), (-1.0, 0.0)),
        (np.arange(-2, 1), (-2.0, -1.0, 0.0)),
        (np.linspace(0.0, 1.0, 3), (0.0, 0.5, 1.0)),
        (range(-10, 11), tuple(float(t) for t in range(-10, 11))),
    ),
)
def test_output_validation(values: Any, expected: tuple[float, ...]) -> None:
    """Test that the output is a tuple of floats in the original order."""
    result = _make_float_tuple(values)
    assert isinstance(result, tuple)
    assert all(isinstance(v, float) for v in result)
    assert result == expected


def test_unordered_time_points_are_preserved() -> None:
    """Time points are kept in the order given, not sorted."""
    model = TimeGridTestModel(time=[3, -1, 2])
    assert model.time == (3.0, -1.0, 2.0)


@pytest.mark.parametrize("time", ([], (), np.array([]), ["a", "b"], None))
def test_invalid_time_grid_validation_error(time: Any) -> None:
    """Empty or non-numeric time grids are rejected."""
    with pytest.raises(ValidationError):
        TimeGridTestModel(time=time)
