"""Who may do what.

Every check takes the acting identity explicitly; ``None`` means nobody is
signed in and always fails with Unauthorized before any role is looked at.
"""
from .entities import Report, User
from .errors import Forbidden, Unauthorized


def require_authenticated(identity: User | None) -> User:
    if identity is None:
        raise Unauthorized("Not authenticated")
    return identity


def require_coordinator(identity: User | None) -> User:
    user = require_authenticated(identity)
    if not user.is_coordinator:
        raise Forbidden("Access denied. Only coordinators can manage students and adaptations.")
    return user


def require_report_author(identity: User | None, report: Report) -> User:
    # coordinators get no exception here
    user = require_authenticated(identity)
    if report.teacher_id != user.id:
        raise Forbidden("Access denied. You can only change your own reports.")
    return user
