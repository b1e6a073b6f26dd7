from __future__ import annotations


class StratSpecError(Exception):
    """Package base exception."""


class RegistryError(StratSpecError):
    """Variant registry or formula library is inconsistent."""


class CompositionError(StratSpecError):
    """Votes do not fit the requested composition mode."""
