from __future__ import annotations

from timekeeper.core.errors import Forbidden, NotFound
from timekeeper.models.project import Project
from timekeeper.models.task import Task
from timekeeper.models.user import User


def require_project_owner(project: Project | None, user: User) -> Project:
    # existence first, then ownership: a foreign project is 403, a missing one 404
    if not project:
        raise NotFound.for_resource("Project")
    if project.user_id != user.id:
        raise Forbidden("Unauthorized access to project")
    return project


def require_task_owner(task: Task | None, user: User) -> Task:
    if not task:
        raise NotFound.for_resource("Task")
    if task.owner_id != user.id:
        raise Forbidden("Unauthorized access to task")
    return task
