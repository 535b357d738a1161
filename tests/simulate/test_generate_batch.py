"""Unit tests for the `growthsim.simulate.generate_batch` function."""

import logging
from typing import Any

import numpy as np
import pandas as pd
import pytest
from pydantic import ValidationError

from growthsim.parameters import SampledParameter
from growthsim.simulate import generate_batch


def _triples(batch: pd.DataFrame) -> np.ndarray:
    return batch.drop_duplicates("sim")[["mid", "asymptote", "scale"]].to_numpy()


def test_batch_shape() -> None:
    """Forty curves over the default grid give 840 rows in curve order."""
    batch = generate_batch(40, random_seed=0)
    assert batch.columns.tolist() == [
        "sim",
        "time",
        "proportion",
        "asymptote",
        "scale",
        "mid",
        "min_proportion",
    ]
    assert len(batch) == 840
    assert batch["sim"].unique().tolist() == list(range(1, 41))
    assert (batch.groupby("sim").size() == 21).all()
    assert batch["sim"].is_monotonic_increasing
    for _, curve in batch.groupby("sim"):
        assert curve["time"].tolist() == [float(t) for t in range(-10, 11)]


def test_min_proportion_consistency() -> None:
    """Each curve carries the minimum of its own proportions on every row."""
    batch = generate_batch(25, random_seed=3)
    grouped = batch.groupby("sim")
    assert (grouped["min_proportion"].nunique() == 1).all()
    assert np.array_equal(
        grouped["min_proportion"].first().to_numpy(),
        grouped["proportion"].min().to_numpy(),
    )


def test_fixed_asymptote_bound() -> None:
    """A fixed asymptote is carried through and never exceeded."""
    batch = generate_batch(50, asymptote=0.7, random_seed=11)
    assert (batch["asymptote"] == 0.7).all()
    expected = 0.7 / (1.0 + np.exp((batch["mid"] - batch["time"]) / batch["scale"]))
    assert np.allclose(batch["proportion"], expected, rtol=0.0, atol=1e-12)
    assert (batch["proportion"] <= 0.7).all()
    before_mid = batch[(batch["time"] < batch["mid"]) & (batch["scale"] > 0.0)]
    assert (before_mid["proportion"] < 0.35).all()


def test_reproducible_under_seed() -> None:
    """The same seed gives the same resolved triples in the same order."""
    first = generate_batch(1000, time=[0.0], random_seed=20240101)
    second = generate_batch(1000, time=[0.0], random_seed=20240101)
    assert np.array_equal(_triples(first), _triples(second))
    pd.testing.assert_frame_equal(first, second)


def test_draws_consumed_in_curve_order() -> None:
    """Draws follow mid, asymptote, then scale for each curve in turn."""
    batch = generate_batch(5, time=[0.0], random_seed=42)
    generator = np.random.default_rng(42)
    expected = [
        (
            generator.normal(loc=0.0, scale=3.0),
            generator.beta(a=2.0, b=1.0),
            generator.normal(loc=2.0, scale=0.5),
        )
        for _ in range(5)
    ]
    assert np.array_equal(_triples(batch), np.array(expected))


def test_fixed_parameters_do_not_consume_draws() -> None:
    """Only sampled parameters advance the shared generator."""
    batch = generate_batch(4, time=[0.0], mid=1.0, random_seed=8)
    generator = np.random.default_rng(8)
    expected = [
        (1.0, generator.beta(a=2.0, b=1.0), generator.normal(loc=2.0, scale=0.5))
        for _ in range(4)
    ]
    assert np.array_equal(_triples(batch), np.array(expected))


def test_generator_is_shared_and_advanced() -> None:
    """A generator passed in is drawn from directly and left advanced."""
    generator = np.random.default_rng(6)
    first = generate_batch(3, random_seed=generator)
    second = generate_batch(3, random_seed=generator)
    assert not np.array_equal(_triples(first), _triples(second))
    combined = generate_batch(6, random_seed=6)
    assert np.array_equal(
        np.concatenate([_triples(first), _triples(second)]), _triples(combined)
    )


def test_all_fixed_parameters_identical_curves() -> None:
    """Without sampled parameters every curve is identical."""
    batch = generate_batch(3, mid=0.0, asymptote=1.0, scale=1.0)
    curves = [
        curve.drop(columns="sim").reset_index(drop=True)
        for _, curve in batch.groupby("sim")
    ]
    for curve in curves[1:]:
        pd.testing.assert_frame_equal(curve, curves[0])


@pytest.mark.parametrize("n", (0, -5, 2.0, 2.5, "10", True, None))
def test_invalid_count_validation_error(n: Any) -> None:
    """Non-positive or non-integral counts are rejected immediately."""
    with pytest.raises(ValidationError):
        generate_batch(n)


def test_sampling_failure_fails_whole_batch() -> None:
    """An invalid distribution parameter fails the batch call."""
    with pytest.raises(ValueError):
        generate_batch(
            10,
            scale=SampledParameter(
                distribution="Normal", distribution_kwargs={"mu": 2.0, "sigma": -0.5}
            ),
            random_seed=1,
        )


def test_debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Debug mode logs the batch, parameter specifications, and resolved curves."""
    with caplog.at_level(logging.DEBUG):
        generate_batch(2, asymptote=1.5, random_seed=1, debug=True)
    assert "Generating 2 curves over 21 time points." in caplog.text
    assert "Parameter 'asymptote' is fixed at 1.5." in caplog.text
    assert "Parameter 'mid' is drawn from Normal(mu=0.0, sigma=3.0)." in caplog.text
    assert "Resolved curve 1 with" in caplog.text
    assert "Resolved curve 2 with" in caplog.text
    assert "proportions outside of [0, 1]" in caplog.text


def test_silent_without_debug(caplog: pytest.LogCaptureFixture) -> None:
    """Nothing is logged unless debug mode is requested."""
    with caplog.at_level(logging.DEBUG):
        generate_batch(2, random_seed=1)
    assert not [r for r in caplog.records if r.name == "growthsim.simulate"]
