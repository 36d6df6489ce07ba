"""Pose sink implementations."""


def __getattr__(name: str):
    """Lazy import sinks so importing the package stays cheap."""
    if name == "ConsoleSink":
        from .console import ConsoleSink
        return ConsoleSink
    if name == "RecordingSink":
        from .recording import RecordingSink
        return RecordingSink
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["ConsoleSink", "RecordingSink"]
