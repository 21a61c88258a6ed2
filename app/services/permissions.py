"""Derive named permissions from a role's boolean capability flags."""

from typing import Any

# Canonical order: (permission name carried in tokens, role attribute).
# Resolved permission lists always follow this order so token claims are reproducible.
PERMISSION_FLAGS: tuple[tuple[str, str], ...] = (
    ("canManageAssessment", "can_manage_assessment"),
    ("canManageUser", "can_manage_user"),
    ("canManageRole", "can_manage_role"),
    ("canManageNotification", "can_manage_notification"),
    ("canManageLocalGroup", "can_manage_local_group"),
    ("canManageReports", "can_manage_reports"),
    ("canAttemptAssessment", "can_attempt_assessment"),
    ("canViewReport", "can_view_report"),
    ("canManageMyAccount", "can_manage_my_account"),
    ("canViewNotification", "can_view_notification"),
)

PERMISSION_NAMES: tuple[str, ...] = tuple(name for name, _ in PERMISSION_FLAGS)


def resolve_permissions(role: Any | None) -> list[str]:
    """
    Return the permission names whose flag is true on role, in canonical order.

    Flags that are missing, None or false contribute nothing; no role yields [].
    """
    if role is None:
        return []
    return [name for name, attr in PERMISSION_FLAGS if getattr(role, attr, False) is True]
