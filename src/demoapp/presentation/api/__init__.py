"""
HTTP API for demoapp.
"""
