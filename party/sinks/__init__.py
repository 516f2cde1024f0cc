"""Output sinks for exporting party aggregates."""

from party.sinks.json_file import JsonFileSink

__all__ = ["JsonFileSink"]
