from __future__ import annotations

from typing import Optional

import click
from flask import Flask, current_app

from goal_tracker.services.admin_notification_service import (
    DEFAULT_RETENTION_DAYS,
    purge_read_notifications,
)


def _resolve_retention_days(cli_value: Optional[int]) -> int:
    if cli_value is None:
        configured = current_app.config.get(
            "NOTIFICATION_RETENTION_DAYS", DEFAULT_RETENTION_DAYS
        )
        return max(int(configured), 1)
    return max(int(cli_value), 1)


def register_notification_retention_commands(app: Flask) -> None:
    @app.cli.group("admin-notifications")
    def admin_notifications_group() -> None:
        """Operational commands for the admin notification feed."""

    @admin_notifications_group.command("purge-read")
    @click.option(
        "--retention-days",
        type=int,
        default=None,
        help="Retention window in days (defaults to NOTIFICATION_RETENTION_DAYS).",
    )
    def purge_read_command(retention_days: Optional[int]) -> None:
        effective_retention_days = _resolve_retention_days(retention_days)
        deleted = purge_read_notifications(retention_days=effective_retention_days)
        current_app.logger.info(
            "admin_notifications_purged deleted=%s retention_days=%s",
            deleted,
            effective_retention_days,
        )
        click.echo(f"deleted={deleted} retention_days={effective_retention_days}")
