"""
ExpoHub - a hub of small real-time arcade games.

Packages:
- games: session lifecycle, scheduler, physics, spawning, collision, scoring
- storage: best-score and settings persistence
- logging: module loggers and structured records
"""

__version__ = "1.0.0"
