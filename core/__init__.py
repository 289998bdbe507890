"""Core components of the translation router.

The ``core.trans`` package holds the routing subsystem: backend adapters, language providers,
the provider registry and the dispatcher in front of them.
"""

from core.version import VERSION

__all__: list[str] = ["VERSION"]
