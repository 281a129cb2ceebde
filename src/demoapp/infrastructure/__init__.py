"""
Infrastructure layer.

Concrete synchronization, reload, lifecycle, web server and monitoring
implementations.
"""
