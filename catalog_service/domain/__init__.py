"""
Domain layer - Core business errors and rules.

This layer is independent of any infrastructure or framework concerns.
"""
