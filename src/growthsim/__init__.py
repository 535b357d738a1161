"""Simulate families of logistic growth curves."""

__all__ = (
    "curves",
    "parameters",
    "prior",
    "simulate",
)
__version__ = "0.1.0"


from growthsim import (
    curves,
    parameters,
    prior,
    simulate,
)
