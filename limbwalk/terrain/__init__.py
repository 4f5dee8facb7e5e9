"""
Terrain module
Ground height/normal queries
"""

from .ground import FlatGround, GroundQuery, RollingHills, make_ground

__all__ = ['FlatGround', 'GroundQuery', 'RollingHills', 'make_ground']
