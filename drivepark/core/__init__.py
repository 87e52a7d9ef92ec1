"""
Core utilities shared across the DrivePark apps.

This package hosts configuration, logging setup, the locale router, password
and token helpers, the bearer identity capability and rate limiting. Routers
and services depend on these primitives instead of reading the environment
or request headers themselves.
"""
