"""Admin notification side-channel.

Every state-changing operation describes what happened as a ``DomainEvent``
and hands it to ``NotificationDispatcher.emit``. Emission is best-effort:
the triggering write has already been committed, so a failure here is logged
and swallowed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Protocol
from uuid import UUID

from flask import current_app

from goal_tracker.models.admin_notification import (
    AdminNotification,
    NotificationSeverity,
    NotificationType,
)
from goal_tracker.services.admin_notification_service import (
    NotificationDraft,
    NotificationSink,
    SQLAlchemyNotificationSink,
)
from goal_tracker.utils.money import format_money, to_decimal

HIGH_VALUE_GOAL_THRESHOLD = Decimal("10000")

GOAL_COUNT_MILESTONES = {5: "5_goals", 10: "10_goals"}
COMPLETION_COUNT_MILESTONES = {1: "first_completion", 5: "5_completions"}

_ADMIN_ACTION_SEVERITIES = {
    "user_updated": NotificationSeverity.INFO,
    "user_promoted": NotificationSeverity.WARNING,
    "user_demoted": NotificationSeverity.WARNING,
    "user_deleted": NotificationSeverity.CRITICAL,
    "goal_updated": NotificationSeverity.INFO,
    "goal_deleted": NotificationSeverity.WARNING,
}


@dataclass(frozen=True)
class DomainEvent:
    type: NotificationType
    user: Any | None = None
    goal: Any | None = None
    admin: Any | None = None
    action: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


class EventEmitter(Protocol):
    def emit(self, event: DomainEvent) -> AdminNotification | None:
        ...

    def emit_all(self, events: list[DomainEvent]) -> None:
        ...


def is_high_value_goal(goal: Any) -> bool:
    return to_decimal(goal.target_amount) >= HIGH_VALUE_GOAL_THRESHOLD


def user_registered(user: Any) -> DomainEvent:
    return DomainEvent(type=NotificationType.USER_REGISTERED, user=user)


def user_first_goal(user: Any, goal: Any) -> DomainEvent:
    return DomainEvent(type=NotificationType.USER_FIRST_GOAL, user=user, goal=goal)


def goal_completed(user: Any, goal: Any) -> DomainEvent:
    return DomainEvent(type=NotificationType.GOAL_COMPLETED, user=user, goal=goal)


def goal_high_value(user: Any, goal: Any) -> DomainEvent:
    return DomainEvent(type=NotificationType.GOAL_HIGH_VALUE, user=user, goal=goal)


def user_milestone(
    user: Any, milestone: str, details: dict[str, Any] | None = None
) -> DomainEvent:
    return DomainEvent(
        type=NotificationType.USER_MILESTONE,
        user=user,
        action=milestone,
        details=details or {},
    )


def admin_action(
    admin: Any,
    action: str,
    target: Any,
    details: dict[str, Any] | None = None,
) -> DomainEvent:
    if action.startswith("goal_"):
        return DomainEvent(
            type=NotificationType.ADMIN_ACTION,
            admin=admin,
            goal=target,
            action=action,
            details=details or {},
        )
    return DomainEvent(
        type=NotificationType.ADMIN_ACTION,
        admin=admin,
        user=target,
        action=action,
        details=details or {},
    )


def suspicious_activity(kind: str, data: dict[str, Any]) -> DomainEvent:
    return DomainEvent(
        type=NotificationType.SUSPICIOUS_ACTIVITY,
        action=kind,
        details=dict(data),
    )


def _goal_metadata(goal: Any) -> dict[str, Any]:
    return {
        "goal_name": goal.name,
        "target_amount": format_money(goal.target_amount),
        "current_amount": format_money(goal.current_amount),
        "currency": goal.currency_symbol,
        "category": goal.category,
        "timeframe": goal.timeframe,
    }


def _build_user_registered(event: DomainEvent) -> NotificationDraft:
    user = event.user
    return NotificationDraft(
        type=NotificationType.USER_REGISTERED.value,
        title="New user registered",
        message=f"{user.username} ({user.email}) just signed up",
        severity=NotificationSeverity.INFO.value,
        user_id=user.id,
        metadata={
            "username": user.username,
            "email": user.email,
            "currency": user.currency_code,
        },
    )


def _build_first_goal(event: DomainEvent) -> NotificationDraft:
    user, goal = event.user, event.goal
    return NotificationDraft(
        type=NotificationType.USER_FIRST_GOAL.value,
        title="First goal created",
        message=f'{user.username} created their first goal: "{goal.name}"',
        severity=NotificationSeverity.SUCCESS.value,
        user_id=user.id,
        goal_id=goal.id,
        metadata={"username": user.username, **_goal_metadata(goal)},
    )


def _build_goal_completed(event: DomainEvent) -> NotificationDraft:
    user, goal = event.user, event.goal
    return NotificationDraft(
        type=NotificationType.GOAL_COMPLETED.value,
        title="Goal completed",
        message=f'{user.username} reached their goal "{goal.name}"',
        severity=NotificationSeverity.SUCCESS.value,
        user_id=user.id,
        goal_id=goal.id,
        metadata={"username": user.username, **_goal_metadata(goal)},
    )


def _build_high_value(event: DomainEvent) -> NotificationDraft:
    user, goal = event.user, event.goal
    return NotificationDraft(
        type=NotificationType.GOAL_HIGH_VALUE.value,
        title="High value goal",
        message=(
            f"{user.username} is aiming for {goal.currency_symbol}"
            f'{format_money(goal.target_amount)} for "{goal.name}"'
        ),
        severity=NotificationSeverity.INFO.value,
        user_id=user.id,
        goal_id=goal.id,
        metadata={"username": user.username, **_goal_metadata(goal)},
    )


def _build_user_milestone(event: DomainEvent) -> NotificationDraft:
    user = event.user
    milestone = event.action or ""
    metadata: dict[str, Any] = {"username": user.username, "milestone": milestone}
    if milestone == "5_goals":
        message = f"{user.username} created 5 goals"
        metadata["goal_count"] = 5
    elif milestone == "10_goals":
        message = f"{user.username} created 10 goals"
        metadata["goal_count"] = 10
    elif milestone == "first_completion":
        message = f"{user.username} completed their first goal"
        metadata["completed_count"] = 1
    elif milestone == "5_completions":
        message = f"{user.username} completed 5 goals"
        metadata["completed_count"] = 5
    else:
        message = f"{user.username} reached a milestone"
    metadata.update(event.details)
    return NotificationDraft(
        type=NotificationType.USER_MILESTONE.value,
        title="Milestone reached",
        message=message,
        severity=NotificationSeverity.SUCCESS.value,
        user_id=user.id,
        metadata=metadata,
    )


def _build_admin_action(event: DomainEvent) -> NotificationDraft:
    admin = event.admin
    action = event.action or "unknown"
    details = event.details
    severity = _ADMIN_ACTION_SEVERITIES.get(action, NotificationSeverity.INFO)

    if event.goal is not None:
        goal = event.goal
        verb = "deleted" if action == "goal_deleted" else "updated"
        message = f'{admin.username} {verb} the goal "{goal.name}"'
        user_id = goal.user_id
        goal_id = goal.id
    else:
        target = event.user
        user_id = target.id
        goal_id = None
        if action == "user_deleted":
            message = f"{admin.username} deleted the user {target.email}"
        elif action == "user_promoted":
            message = f"{admin.username} promoted {target.username} to admin"
        elif action == "user_demoted":
            message = f"{admin.username} demoted {target.username} to user"
        elif action == "user_updated":
            message = f"{admin.username} updated the user {target.username}"
        else:
            message = f"{admin.username} performed: {action}"

    if details.get("role_changed") and severity == NotificationSeverity.INFO:
        severity = NotificationSeverity.WARNING

    return NotificationDraft(
        type=NotificationType.ADMIN_ACTION.value,
        title="Admin action",
        message=message,
        severity=severity.value,
        user_id=user_id,
        admin_id=admin.id,
        goal_id=goal_id,
        metadata={"admin_username": admin.username, "action": action, **details},
    )


def _build_suspicious_activity(event: DomainEvent) -> NotificationDraft:
    kind = event.action or "unknown"
    data = event.details
    if kind == "multiple_failed_logins":
        message = f"Multiple failed login attempts for {data.get('email')}"
    elif kind == "rapid_goal_creation":
        message = (
            f"{data.get('username')} created {data.get('count')} goals "
            f"in {data.get('minutes')} minutes"
        )
    elif kind == "unusual_amount":
        message = (
            f"Unusual amount: {data.get('currency', '')}{data.get('amount')} "
            f"for \"{data.get('goal_name')}\""
        )
    else:
        message = f"Suspicious activity detected: {kind}"
    raw_user_id = data.get("user_id")
    user_id = UUID(str(raw_user_id)) if raw_user_id else None
    return NotificationDraft(
        type=NotificationType.SUSPICIOUS_ACTIVITY.value,
        title="Suspicious activity",
        message=message,
        severity=NotificationSeverity.CRITICAL.value,
        user_id=user_id,
        metadata={
            "kind": kind,
            **{key: str(value) for key, value in data.items()},
        },
    )


def goal_created_events(user: Any, goal: Any, goal_count: int) -> list[DomainEvent]:
    """Events owed after ``user`` persisted their ``goal_count``-th goal."""
    events: list[DomainEvent] = []
    if goal_count == 1:
        events.append(user_first_goal(user, goal))
    if is_high_value_goal(goal):
        events.append(goal_high_value(user, goal))
    milestone = GOAL_COUNT_MILESTONES.get(goal_count)
    if milestone is not None:
        events.append(user_milestone(user, milestone))
    return events


def completion_events(
    user: Any, goal: Any, completed_count: int
) -> list[DomainEvent]:
    events = [goal_completed(user, goal)]
    milestone = COMPLETION_COUNT_MILESTONES.get(completed_count)
    if milestone is not None:
        events.append(user_milestone(user, milestone))
    return events


_BUILDERS: dict[NotificationType, Callable[[DomainEvent], NotificationDraft]] = {
    NotificationType.USER_REGISTERED: _build_user_registered,
    NotificationType.USER_FIRST_GOAL: _build_first_goal,
    NotificationType.GOAL_COMPLETED: _build_goal_completed,
    NotificationType.GOAL_HIGH_VALUE: _build_high_value,
    NotificationType.USER_MILESTONE: _build_user_milestone,
    NotificationType.ADMIN_ACTION: _build_admin_action,
    NotificationType.SUSPICIOUS_ACTIVITY: _build_suspicious_activity,
}


def build_notification(event: DomainEvent) -> NotificationDraft:
    builder = _BUILDERS.get(event.type)
    if builder is None:
        raise ValueError(f"Unsupported notification event: {event.type.value}")
    return builder(event)


class NotificationDispatcher:
    def __init__(self, sink: NotificationSink | None = None) -> None:
        self._sink = sink or SQLAlchemyNotificationSink()

    def emit(self, event: DomainEvent) -> AdminNotification | None:
        try:
            notification = self._sink.append(build_notification(event))
        except Exception:
            current_app.logger.exception(
                "admin_notification_failed type=%s", event.type.value
            )
            return None
        current_app.logger.info(
            "admin_notification_created type=%s id=%s",
            event.type.value,
            getattr(notification, "id", None),
        )
        return notification

    def emit_all(self, events: list[DomainEvent]) -> None:
        for event in events:
            self.emit(event)
