"""
Core app - Shared abstractions and utilities.

Provides the service error taxonomy and the Ninja exception handlers
that translate it into JSON responses (see apps.core.errors).
"""
