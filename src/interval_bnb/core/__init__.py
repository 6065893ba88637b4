"""
Core Module - Foundational Components

Provides:
- Canonical JSON serialization for result files
"""

from .canonical_json import canonical_dumps

__all__ = [
    'canonical_dumps',
]
