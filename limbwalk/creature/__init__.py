"""
Creature module
Assembly of limbs into a creature and the headless simulation loop
"""

from .assembly import Creature, CreatureFrame, build_creature
from .layouts import LAYOUTS, get_layout
from .simulation import Simulation

__all__ = ['Creature', 'CreatureFrame', 'build_creature', 'LAYOUTS', 'get_layout', 'Simulation']
