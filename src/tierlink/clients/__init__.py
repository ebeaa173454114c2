from .uptime import UptimeClient

__all__ = ["UptimeClient"]
