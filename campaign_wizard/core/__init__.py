"""
Core configuration.
"""
