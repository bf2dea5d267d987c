"""Business logic services.

This package contains the formula evaluation logic used by the API
endpoints.
"""
