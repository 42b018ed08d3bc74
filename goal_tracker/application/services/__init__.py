from goal_tracker.application.services.goal_application_service import (
    GoalApplicationService,
)

__all__ = ["GoalApplicationService"]
