"""
Reversi against a one-ply CPU opponent.
"""

__version__ = '0.2.0'
