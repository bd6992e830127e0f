"""hwprint - Windows hardware inventory and fingerprint reporter."""

__version__ = "1.0.0"
