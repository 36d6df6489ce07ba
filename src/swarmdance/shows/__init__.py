"""Built-in shows."""
from .intro import (
    DRONES as INTRO_DRONES,
    INTRO_MOVEMENTS,
    create_intro_act,
    create_intro_choreography,
    create_intro_configuration,
)

__all__ = [
    "INTRO_DRONES",
    "INTRO_MOVEMENTS",
    "create_intro_act",
    "create_intro_choreography",
    "create_intro_configuration",
]
