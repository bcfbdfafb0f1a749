"""notesearch: keyword search over a local workspace of notes."""

__version__ = "0.1.0"
