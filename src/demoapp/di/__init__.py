"""
Dependency injection.
"""

from demoapp.di.container import Container

__all__ = ["Container"]
