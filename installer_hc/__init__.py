"""Health check for the OSGi installer's artifact state."""

__version__ = "0.1.0"
