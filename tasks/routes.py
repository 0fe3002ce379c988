"""
Task API routes — create, list, update, delete.

Route prefix: /api/tasks
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import internal_error
from auth.dependencies import get_current_user
from database.models import User
from database.session import get_db_session
from tasks.store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])


# ── Request / response schemas ─────────────────────────────────────────


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    deadline: date


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    deadline: Optional[date] = None

    @field_validator("title", "deadline")
    @classmethod
    def reject_null(cls, v):
        # may be omitted, but an explicit null would clear a required column
        if v is None:
            raise ValueError("must not be null")
        return v


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: Optional[str] = None
    deadline: date
    user: uuid.UUID = Field(validation_alias=AliasChoices("user_id", "user"))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def get_task_store(session: AsyncSession = Depends(get_db_session)) -> TaskStore:
    return TaskStore(session)


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/create", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    req: TaskCreate,
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> TaskResponse:
    """Create a new task owned by the caller."""
    with internal_error("Failed to create the task."):
        task = await store.create(user, req.title, req.deadline, req.description)
    return TaskResponse.model_validate(task)


@router.get("/all", response_model=List[TaskResponse])
async def list_tasks(
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> List[TaskResponse]:
    """All tasks created by the caller."""
    with internal_error("Failed to retrieve tasks."):
        tasks = await store.list_all(user)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.put("/update/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    req: TaskUpdate,
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> TaskResponse:
    with internal_error("Failed to update the task."):
        task = await store.update(user, task_id, req.model_dump(exclude_unset=True))
    return TaskResponse.model_validate(task)


@router.delete("/delete/{task_id}", response_model=TaskResponse)
async def delete_task(
    task_id: str,
    user: User = Depends(get_current_user),
    store: TaskStore = Depends(get_task_store),
) -> TaskResponse:
    with internal_error("Failed to delete the task."):
        task = await store.delete(user, task_id)
    return TaskResponse.model_validate(task)
