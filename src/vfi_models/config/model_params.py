# vfi_models/config/model_params.py
"""
Model parameter definitions and loading utilities.

This module defines the parameters of the neoclassical growth model whose
exogenous productivity follows a log-AR(1) process.  The AR(1) block
(``nz``, ``mu``, ``rho``, ``sigma``, ``lambda_``) drives Tauchen's
discretization; the remaining fields feed the capital grid and the
initial value-function guess.

Parameters are immutable after initialization to prevent accidental
modification while grids are being built.

Example:
    >>> from vfi_models.config.model_params import load_model_params
    >>> params = load_model_params("config/params.json")
    >>> print(f"Productivity states: {params.nz}")
"""

from dataclasses import dataclass, fields
from typing import Any, Dict
import os
import sys
import logging

from vfi_models.io.file_utils import load_json_file

logger = logging.getLogger(__name__)

# ``lambda`` is a Python keyword; JSON files use the bare name.
_JSON_KEY_ALIASES = {"lambda": "lambda_"}


def _coerce(name: str, kind: type, value: Any) -> Any:
    """Convert a raw JSON value to the declared field type."""
    if isinstance(value, bool):
        raise TypeError(f"Parameter '{name}' must be numeric, got {value!r}")
    if kind is int and isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Parameter '{name}' must be an integer, got {value}")
        return int(value)
    return kind(value)


@dataclass(frozen=True)
class ModelParams:
    """
    Immutable container for model parameters.

    The AR(1) fields are not validated here; the discretizer checks them
    at its entry point unless called with ``validate=False``.

    Attributes:
        nk: Number of points in the capital grid.
        nz: Number of points in the productivity grid (>= 3).
        eta: Coefficient of relative risk aversion.
        beta: Discount factor, in (0, 1).
        alpha: Capital share in production.
        delta: Capital depreciation rate.
        mu: Intercept of the log-productivity AR(1) process.
        rho: Persistence of the log-productivity AR(1) process.
        sigma: Standard deviation of the AR(1) innovation.
        lambda_: Grid half-width in unconditional standard deviations.
    """

    nk: int = 257
    nz: int = 4
    eta: float = 2.0
    beta: float = 0.984
    alpha: float = 0.35
    delta: float = 0.01
    mu: float = 0.0
    rho: float = 0.95
    sigma: float = 0.005
    lambda_: float = 3.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelParams":
        """
        Build parameters from a plain mapping, accepting ``"lambda"``.

        Unknown keys are dropped with a warning.

        Args:
            data: Mapping of parameter names to values.

        Returns:
            Populated ModelParams instance.
        """
        valid_keys = {f.name for f in fields(cls)}
        renamed = {_JSON_KEY_ALIASES.get(k, k): v for k, v in data.items()}

        unknown = sorted(k for k in renamed if k not in valid_keys)
        if unknown:
            logger.warning(f"Ignoring unknown model parameters: {unknown}")

        types = {f.name: f.type for f in fields(cls)}
        return cls(**{
            k: _coerce(k, types[k], v)
            for k, v in renamed.items() if k in valid_keys
        })

    def to_dict(self) -> Dict[str, Any]:
        """Return the parameters keyed by their JSON names."""
        inverse = {v: k for k, v in _JSON_KEY_ALIASES.items()}
        return {inverse.get(f.name, f.name): getattr(self, f.name) for f in fields(self)}


def load_model_params(filename: str) -> ModelParams:
    """
    Load model parameters from a JSON file.

    A missing file is not fatal: defaults are returned with a warning,
    mirroring how grid configuration files are treated.

    Args:
        filename: Path to the JSON configuration file.

    Returns:
        Populated ModelParams instance.

    Raises:
        SystemExit: If the file cannot be parsed or holds values that do
            not fit the parameter record.
    """
    if not os.path.exists(filename):
        logger.warning(
            f"Parameter file '{filename}' not found. Using defaults."
        )
        return ModelParams()

    data = load_json_file(filename)
    try:
        params = ModelParams.from_dict(data)
    except (TypeError, ValueError) as e:
        logger.error(f"Parameter mismatch in {filename}: {e}")
        sys.exit(1)

    logger.info(f"Loaded model parameters from {filename}")
    return params
