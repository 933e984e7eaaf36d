"""
Inspector task list service.

Each inspector has a personal to-do list on their dashboard. Lists are kept
in the local key/value cache under "inspector_tasks_<user id>" as JSON and
rewritten in full on every change.

A corrupted list is logged and treated as empty rather than failing the
dashboard.
"""

import logging
from typing import List
from uuid import UUID

from pydantic import TypeAdapter

from ..models.inspector_task import InspectorTask
from ..repositories.key_value_store import IKeyValueStore

logger = logging.getLogger(__name__)

TASK_KEY_PREFIX = "inspector_tasks_"

_task_list = TypeAdapter(List[InspectorTask])


class TaskService:
    """Service for inspector task lists."""

    def __init__(self, store: IKeyValueStore):
        """
        Raises:
            ValueError: If store is None
        """
        if store is None:
            raise ValueError("TaskService requires store (cannot be None)")

        self.store = store

    @staticmethod
    def task_key(user_id: UUID) -> str:
        return f"{TASK_KEY_PREFIX}{user_id}"

    def list_tasks(self, user_id: UUID) -> List[InspectorTask]:
        """Return the user's tasks in insertion order (empty if none or unreadable)."""
        raw = self.store.get(self.task_key(user_id))
        if raw is None:
            return []

        try:
            return _task_list.validate_json(raw)
        except ValueError as e:
            logger.error(f"Failed to load tasks for user {user_id}: {e}")
            return []

    def _save(self, user_id: UUID, tasks: List[InspectorTask]) -> List[InspectorTask]:
        self.store.set(self.task_key(user_id), _task_list.dump_json(tasks).decode("utf-8"))
        return tasks

    def add_task(self, user_id: UUID, text: str) -> List[InspectorTask]:
        """
        Append a task.

        Blank text is ignored and the list is returned unchanged.

        Returns:
            The updated task list
        """
        tasks = self.list_tasks(user_id)
        text = text.strip()
        if not text:
            return tasks

        next_id = max((t.id for t in tasks), default=0) + 1
        return self._save(user_id, [*tasks, InspectorTask(id=next_id, text=text)])

    def toggle_task(self, user_id: UUID, task_id: int) -> List[InspectorTask]:
        """Flip a task's completed flag (unknown id: list unchanged)."""
        tasks = self.list_tasks(user_id)
        if not any(t.id == task_id for t in tasks):
            return tasks

        return self._save(user_id, [
            t.model_copy(update={"completed": not t.completed}) if t.id == task_id else t
            for t in tasks
        ])

    def delete_task(self, user_id: UUID, task_id: int) -> List[InspectorTask]:
        """Remove a task (unknown id: list unchanged)."""
        tasks = self.list_tasks(user_id)
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return tasks
        return self._save(user_id, remaining)
