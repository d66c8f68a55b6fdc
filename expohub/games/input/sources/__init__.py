"""
Input source implementations.
"""

from expohub.games.input.sources.base import InputSource
from expohub.games.input.sources.mouse import MouseInputSource

__all__ = ['InputSource', 'MouseInputSource']
