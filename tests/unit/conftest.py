"""Shared test fixtures for grid and Markov-chain unit tests."""

from __future__ import annotations

import pytest
import tensorflow as tf

# Force CPU for CI — must be called before any TF ops
tf.config.set_visible_devices([], 'GPU')

from vfi_models.config.model_params import ModelParams


@pytest.fixture
def persistent_params() -> ModelParams:
    """The nz=5, rho=0.9, sigma=0.02, lambda=3 calibration."""
    return ModelParams(
        nk=20, nz=5, eta=2.0, beta=0.96, alpha=0.35, delta=0.1,
        mu=0.0, rho=0.9, sigma=0.02, lambda_=3.0,
    )
