"""DTOs and API schemas for the Tasks app."""
from dataclasses import dataclass
from typing import Optional

from ninja import Schema


@dataclass(frozen=True)
class TaskDTO:
    id: int
    description: str


class TaskIn(Schema):
    description: Optional[str] = None


class TaskCreateIn(Schema):
    task: Optional[TaskIn] = None


class TaskOut(Schema):
    id: int
    description: str


class ErrorOut(Schema):
    error: str


class AuthErrorOut(Schema):
    message: str
