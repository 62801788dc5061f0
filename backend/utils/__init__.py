"""
Shared utility helpers for the Psak Din Search backend.

Modules:
- serialization: JSON-ready dicts for API responses
"""
