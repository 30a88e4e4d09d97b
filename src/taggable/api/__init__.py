"""FastAPI integration for taggable: request dependencies and error handlers."""

__all__: list[str] = []
