"""Ownership-based authorization: User → Project → Task."""

from tasktrack.authz.guard import OwnershipGuard

__all__ = ["OwnershipGuard"]
