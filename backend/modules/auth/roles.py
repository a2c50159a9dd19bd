"""
Role capabilities.

Which pages a role may reach is declared here once; guards and login
redirects read capabilities instead of comparing role names.
"""

from dataclasses import dataclass
from typing import Optional

from shared.models import Role

LOGIN_PATH = "/login"
STUDENT_HOME_PATH = "/student/dashboard"
ADMIN_HOME_PATH = "/admin/dashboard"


@dataclass(frozen=True)
class RoleCapabilities:
    can_access_admin: bool = False
    can_access_student_portal: bool = True


ROLE_CAPABILITIES: dict[Role, RoleCapabilities] = {
    Role.STUDENT: RoleCapabilities(can_access_admin=False),
    # Teachers share the admin back office; there is no teacher-only surface.
    Role.TEACHER: RoleCapabilities(can_access_admin=True),
    Role.ADMIN: RoleCapabilities(can_access_admin=True),
}


def capabilities_for(role: Optional[Role]) -> RoleCapabilities:
    """Capabilities of a role; an unresolved role gets student rights."""
    return ROLE_CAPABILITIES.get(role or Role.STUDENT, ROLE_CAPABILITIES[Role.STUDENT])


def home_path_for(role: Optional[Role]) -> str:
    """Landing page after sign-in."""
    if capabilities_for(role).can_access_admin:
        return ADMIN_HOME_PATH
    return STUDENT_HOME_PATH
