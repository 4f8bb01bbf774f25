"""
Arena module for running tournaments between CPU difficulty levels.
"""
from .arena import Arena, CPUPlayer, ELORatingSystem

__all__ = ['Arena', 'CPUPlayer', 'ELORatingSystem']
