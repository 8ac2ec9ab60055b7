"""
Shared utilities: configuration, logging, validation and key casing
"""
