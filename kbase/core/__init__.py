"""Core data models for knowledge-base records."""

from .models import ContentType, Record, RecordLoadError, load_records

__all__ = ["ContentType", "Record", "RecordLoadError", "load_records"]
