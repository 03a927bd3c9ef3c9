"""taskcadence — next-occurrence engine for recurring tasks."""

__version__ = "0.3.0"
