"""
External API clients.

Each client wraps a blocking SDK client behind an async interface.
"""

from clients.organizations import OrganizationsClient

__all__ = ["OrganizationsClient"]
