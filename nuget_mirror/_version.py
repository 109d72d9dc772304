"""Version information for nuget-mirror."""

__version__ = "1.0.0"
