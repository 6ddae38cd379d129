"""
User Registry API.

The service itself lives in ``user_registry_api.app``; this top-level
package only namespaces it and exports nothing.
"""

__all__ = []
