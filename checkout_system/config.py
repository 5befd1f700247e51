"""Simulation configuration and validation."""

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from checkout_system.core.base import ConfigurationError
from checkout_system.core.policies import POLICY_NAMES

ARRIVAL_MODELS = ('bernoulli', 'fixed')

RANGE_FIELDS = ('item_range', 'payment_range', 'scan_range')

INT_FIELDS = ('run_duration', 'num_stations', 'inter_arrival_time')


def _require_int(field_name: str, value: Any) -> int:
    # bool is an int subclass but never a valid count or duration
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer, got {value!r}")
    return value


def _require_range(field_name: str, bounds: Any) -> Tuple[int, int]:
    if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
        raise ConfigurationError(f"{field_name} must be a [min, max] pair, got {bounds!r}")
    return (_require_int(field_name, bounds[0]), _require_int(field_name, bounds[1]))


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one checkout simulation run. Times are in seconds."""
    run_duration: int = 7200
    num_stations: int = 5
    inter_arrival_time: int = 30
    arrival_model: str = 'bernoulli'
    item_range: Tuple[int, int] = (1, 20)  # [min, max)
    payment_range: Tuple[int, int] = (10, 30)
    scan_range: Tuple[int, int] = (8, 10)
    policy: str = 'single'
    seed: Optional[int] = None

    def validate(self) -> 'SimulationConfig':
        """Raise ConfigurationError if any parameter is unusable."""
        for field_name in INT_FIELDS:
            _require_int(field_name, getattr(self, field_name))
        if self.seed is not None:
            _require_int('seed', self.seed)

        if self.run_duration <= 0:
            raise ConfigurationError(f"run_duration must be positive, got {self.run_duration}")
        if self.num_stations <= 0:
            raise ConfigurationError(f"num_stations must be positive, got {self.num_stations}")
        if self.inter_arrival_time <= 0:
            raise ConfigurationError(
                f"inter_arrival_time must be positive, got {self.inter_arrival_time}")
        if self.arrival_model not in ARRIVAL_MODELS:
            raise ConfigurationError(f"Unknown arrival model: {self.arrival_model}")
        if self.policy not in POLICY_NAMES:
            raise ConfigurationError(f"Unknown queueing policy: {self.policy}")

        for field_name in RANGE_FIELDS:
            low, high = _require_range(field_name, getattr(self, field_name))
            if low < 0:
                raise ConfigurationError(f"{field_name} minimum must not be negative, got {low}")
            if high <= low:
                raise ConfigurationError(
                    f"{field_name} maximum must exceed minimum, got [{low}, {high})")
        return self

    def replace(self, **changes) -> 'SimulationConfig':
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'SimulationConfig':
        """Build a validated config from a plain mapping, e.g. parsed JSON."""
        if not isinstance(values, dict):
            raise ConfigurationError(f"Configuration must be a JSON object, got {type(values).__name__}")

        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        params = dict(values)
        for field_name in RANGE_FIELDS:
            if field_name in params:
                params[field_name] = _require_range(field_name, params[field_name])
        return cls(**params).validate()


def load_config(path: str) -> SimulationConfig:
    """Load a configuration from a JSON file."""
    try:
        with open(path, 'r') as f:
            values = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid JSON: {e}") from e
    return SimulationConfig.from_dict(values)
