"""
Route guard for protected portal pages.

A pure decision over a Session Store snapshot. It performs no I/O; the
API layer turns the decision into a response.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from shared.models import Role

from .models import SessionState
from .roles import LOGIN_PATH, STUDENT_HOME_PATH, capabilities_for


class RouteOutcome(str, Enum):
    LOADING = "loading"
    REDIRECT = "redirect"
    ALLOW = "allow"


@dataclass(frozen=True)
class RouteDecision:
    outcome: RouteOutcome
    redirect_to: Optional[str] = None
    reason: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome is RouteOutcome.ALLOW


LOADING = RouteDecision(RouteOutcome.LOADING)
ALLOW = RouteDecision(RouteOutcome.ALLOW)


def evaluate_route(
    state: SessionState,
    required_role: Optional[Role] = None,
) -> RouteDecision:
    """
    Decide whether a protected page may render.

    Rules are evaluated in order:
        1. still loading and the timeout has not fired: show loading
        2. the load timed out: back to login
        3. nobody signed in: back to login
        4. admin page without admin capability: back to the student home
        5. otherwise render

    Args:
        state: Current Session Store snapshot
        required_role: Role the page demands, if any. Only ``Role.ADMIN``
            restricts anything; the other roles need nothing beyond sign-in.

    Returns:
        RouteDecision
    """
    if state.loading and not state.timed_out:
        return LOADING

    if state.timed_out:
        return RouteDecision(
            RouteOutcome.REDIRECT,
            redirect_to=LOGIN_PATH,
            reason="Session load timed out",
        )

    if state.identity is None:
        return RouteDecision(
            RouteOutcome.REDIRECT,
            redirect_to=LOGIN_PATH,
            reason="Not signed in",
        )

    if required_role is Role.ADMIN and not capabilities_for(state.role).can_access_admin:
        return RouteDecision(
            RouteOutcome.REDIRECT,
            redirect_to=STUDENT_HOME_PATH,
            reason="Admin access required",
        )

    return ALLOW
