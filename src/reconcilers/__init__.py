"""
Reconcilers package.

A reconciler owns the lifecycle handlers for one resource type.
"""

from reconcilers.organizational_unit import (
    OrganizationalUnitReconciler,
    parent_id_or_root_id,
)

__all__ = ["OrganizationalUnitReconciler", "parent_id_or_root_id"]
