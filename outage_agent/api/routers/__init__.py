from . import assets, events, settings

__all__ = ["assets", "events", "settings"]
