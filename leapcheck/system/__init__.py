"""System state, box and synthetic system construction."""

from .box import Box
from .builder import build_system
from .coupling import (
    BarostatMode,
    KineticEnergyScratch,
    TemperatureCouplingGroup,
    ThermostatMode,
)
from .state import ParticleSystemState

__all__ = [
    "Box",
    "ParticleSystemState",
    "build_system",
    "BarostatMode",
    "ThermostatMode",
    "TemperatureCouplingGroup",
    "KineticEnergyScratch",
]
