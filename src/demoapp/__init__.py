"""
demoapp - Reloadable demo service

Long-running HTTP service whose configuration can be reloaded at runtime
(HTTP or SIGHUP) while readiness follows the startup/shutdown lifecycle.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
