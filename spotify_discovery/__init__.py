"""Spotify taste-based playlist discovery.

Top artists/tracks → recommendation seeds → recommendations → playlist search.
"""

__version__ = "0.1.0"
