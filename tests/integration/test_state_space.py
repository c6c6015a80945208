"""Integration tests: building the full VFI state space from a parameter file.

These tests load parameters from JSON, build every grid through
GridBuilder, and check that the caller-buffer discretizer agrees with the
tensor path on both host and device-variable storage.
"""

import json

import numpy as np
import pytest
import tensorflow as tf
tf.config.set_visible_devices([], 'GPU')

from vfi_models.config.model_params import ModelParams, load_model_params
from vfi_models.vfi import GridBuilder, ar1, stationary_distribution, vf_init


@pytest.fixture
def params_file(tmp_path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({
        "nk": 64, "nz": 5, "eta": 2.0, "beta": 0.984, "alpha": 0.35,
        "delta": 0.01, "mu": 0.0, "rho": 0.95, "sigma": 0.005, "lambda": 3.0,
    }))
    return str(path)


def test_build_state_space(params_file):
    """Every grid has the expected shape and the timings are recorded."""
    params = load_model_params(params_file)
    state = GridBuilder.build_state_space(params)

    assert state["Z"].shape == (5,)
    assert state["transition_matrix"].shape == (5, 5)
    assert state["K"].shape == (64,)
    assert state["V0"].shape == (64, 5)
    assert set(state["timings"]) == {"ar1", "k_grid", "vf_init"}
    assert all(t >= 0.0 for t in state["timings"].values())
    assert np.all(np.isfinite(state["V0"].numpy()))


def test_buffer_path_matches_tensor_path(params_file):
    """ar1/vf_init into pre-sized buffers reproduce the GridBuilder output."""
    params = load_model_params(params_file)
    state = GridBuilder.build_state_space(params)

    Z = tf.Variable(tf.zeros([params.nz], dtype=tf.float64))
    P = np.zeros(params.nz * params.nz)
    V = tf.Variable(tf.zeros([params.nk * params.nz], dtype=tf.float64))

    ar1(params, Z, P)
    vf_init(params, state["K"], Z, V)

    np.testing.assert_array_equal(Z.numpy(), state["Z"].numpy())
    np.testing.assert_array_equal(
        P.reshape(params.nz, params.nz).T, state["transition_matrix"].numpy()
    )
    np.testing.assert_allclose(
        V.numpy().reshape(params.nz, params.nk).T, state["V0"].numpy(), rtol=1e-14
    )


def test_default_calibration_chain_is_ergodic():
    """The default calibration yields a chain with full-support ergodic mass."""
    state = GridBuilder.build_state_space(ModelParams(nk=16))
    pi = stationary_distribution(state["transition_matrix"]).numpy()
    assert np.all(pi > 0)
    assert pi.sum() == pytest.approx(1.0, abs=1e-12)
