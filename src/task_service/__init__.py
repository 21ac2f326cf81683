"""In-memory task tracking service.

Exposes a small JSON-over-HTTP API for creating, reading, updating and
deleting short text tasks with a completion flag. State lives in process
memory only and resets on every start.
"""

__version__ = "0.1.0"
