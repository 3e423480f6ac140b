"""liferamp: AI coaching with weekly gameplans."""

__version__ = "0.1.0"
