"""
Simulation Configuration
========================

Bundles wind, sail and hull settings into one configuration that can be
loaded from and saved to JSON.

Example file:

    {
        "seed": 7,
        "wind": {"base_speed_knots": 15, "base_direction_degrees": 0},
        "sail": {"area": 7.5},
        "hull": {"drag_coefficient": 0.05}
    }
"""

import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict
import logging

from ..physics.constants import KNOTS_TO_MS
from ..physics.sail_aero import SailConfig
from ..physics.validation import HullConfig
from ..physics.wind_field import WindFieldConfig

logger = logging.getLogger(__name__)


def _build(cls, data: Dict[str, Any], section: str):
    """Instantiate a config dataclass, rejecting unknown keys."""
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {section} settings: {', '.join(sorted(unknown))}")
    return cls(**data)


@dataclass
class SimulationConfig:
    """Complete configuration for a sailing simulation."""
    wind: WindFieldConfig = field(default_factory=WindFieldConfig)
    sail: SailConfig = field(default_factory=SailConfig)
    hull: HullConfig = field(default_factory=HullConfig)
    seed: int = 0
    check_invariants: bool = True       # Raise on backward lift

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationConfig':
        """
        Build a configuration from plain data.

        Missing sections and keys keep their defaults. Wind speed may be
        given as ``base_speed_knots`` instead of ``base_speed``.

        Raises:
            ValueError: on unknown sections or settings
        """
        sections = {'wind', 'sail', 'hull', 'seed', 'check_invariants'}
        unknown = set(data) - sections
        if unknown:
            raise ValueError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

        wind_data = dict(data.get('wind', {}))
        if 'base_speed_knots' in wind_data:
            knots = wind_data.pop('base_speed_knots')
            if 'base_speed' in wind_data:
                logger.warning("Both base_speed and base_speed_knots given, using knots")
            wind_data['base_speed'] = knots * KNOTS_TO_MS

        return cls(
            wind=_build(WindFieldConfig, wind_data, 'wind'),
            sail=_build(SailConfig, data.get('sail', {}), 'sail'),
            hull=_build(HullConfig, data.get('hull', {}), 'hull'),
            seed=int(data.get('seed', 0)),
            check_invariants=bool(data.get('check_invariants', True)),
        )

    @classmethod
    def from_json(cls, filepath: str) -> 'SimulationConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        logger.info(f"Loaded simulation config from {filepath}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, filepath: str):
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
