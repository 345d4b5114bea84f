"""toolwire - named tool invocation with schema validation and intent routing."""

__version__ = "0.1.0"
