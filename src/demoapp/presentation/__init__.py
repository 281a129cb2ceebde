"""
HTTP presentation layer.
"""
