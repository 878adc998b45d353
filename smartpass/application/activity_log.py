"""
Name: Activity Recording

Responsibilities:
  - Build activity records with a consistent shape (actor/action/target)
  - Persist via ActivityRepository
  - Best-effort: a failed write never breaks the business operation
"""

from __future__ import annotations

from ..domain.entities import Activity, ActivityAction, new_id
from ..domain.repositories import ActivityRepository
from ..logger import logger


def record_activity(
    repository: ActivityRepository | None,
    *,
    actor_id: str | None,
    action: ActivityAction | str,
    target: str | None = None,
    target_id: str | None = None,
) -> None:
    """
    Append an activity record.

    If repository is None or the write fails, nothing is raised.
    """
    if repository is None:
        return

    label = action.value if isinstance(action, ActivityAction) else str(action)
    activity = Activity(
        id=new_id(),
        user_id=actor_id,
        action=label,
        target=target,
        target_id=target_id,
    )

    try:
        repository.append(activity)
    except Exception as exc:
        logger.warning(
            "Activity recording failed",
            extra={"action": label, "target_id": target_id, "error": str(exc)},
        )
