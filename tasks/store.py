"""
TaskStore — owner-scoped CRUD over the ``tasks`` table.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Task, User
from exceptions import NotFoundOrForbiddenError, ValidationError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "deadline")


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return None


class TaskStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        owner: User,
        title: str,
        deadline: Optional[date],
        description: Optional[str] = None,
    ) -> Task:
        if not title or not title.strip():
            raise ValidationError("Title is required")
        if deadline is None:
            raise ValidationError("Deadline is required")

        task = Task(
            user_id=owner.id,
            title=title,
            description=description,
            deadline=deadline,
        )
        self.session.add(task)
        await self.session.commit()
        logger.info("Task %s created for user %s", task.id, owner.id)
        return task

    async def list_all(self, owner: User) -> List[Task]:
        result = await self.session.execute(
            select(Task)
            .where(Task.user_id == owner.id)
            .order_by(Task.created_at)
        )
        return list(result.scalars().all())

    async def get(self, owner: User, task_id: str | uuid.UUID) -> Task:
        """Fetch the task matching ``(task_id, owner)`` or raise."""
        tid = _to_uuid(task_id)
        if tid is not None:
            result = await self.session.execute(
                select(Task).where(Task.id == tid, Task.user_id == owner.id)
            )
            task = result.scalar_one_or_none()
            if task is not None:
                return task
        raise NotFoundOrForbiddenError(str(task_id))

    async def update(
        self,
        owner: User,
        task_id: str | uuid.UUID,
        fields: Dict[str, Any],
    ) -> Task:
        """Apply a partial update; keys outside ``UPDATABLE_FIELDS`` are ignored."""
        task = await self.get(owner, task_id)

        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if "title" in changes and not (changes["title"] and changes["title"].strip()):
            raise ValidationError("Title is required")
        if "deadline" in changes and changes["deadline"] is None:
            raise ValidationError("Deadline is required")

        for name, value in changes.items():
            setattr(task, name, value)
        await self.session.commit()
        logger.info("Task %s updated (%s)", task.id, ", ".join(changes) or "no changes")
        return task

    async def delete(self, owner: User, task_id: str | uuid.UUID) -> Task:
        task = await self.get(owner, task_id)
        await self.session.delete(task)
        await self.session.commit()
        logger.info("Task %s deleted for user %s", task.id, owner.id)
        return task
