"""Calculator microservice - arithmetic over HTTP query parameters."""

__version__ = "1.0.0"
