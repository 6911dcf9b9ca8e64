"""notemind: notes with a local-LLM chat and reflection panel."""

__version__ = "0.1.0"
