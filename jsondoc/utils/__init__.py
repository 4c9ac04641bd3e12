"""
Configuration and file helpers for jsondoc.
"""
