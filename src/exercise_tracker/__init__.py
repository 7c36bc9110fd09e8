"""exercise-tracker: track users and their logged exercises over HTTP."""

__version__ = "0.1.0"
