"""Fair-play position analytics for youth baseball and softball lineups."""

__version__ = "0.1.0"
