"""
Data models for the Procrastinot dashboard engine
Defines the task, pomodoro session and activity feed structures
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any


# Task statuses as stored by the backend
TASK_PENDING = "Pending"
TASK_IN_PROGRESS = "In Progress"
TASK_COMPLETED = "Completed"
TASK_REVISE_AGAIN = "Revise Again"

# Pomodoro session statuses
SESSION_IN_PROGRESS = "In Progress"
SESSION_PAUSED = "Paused"
SESSION_COMPLETED = "Completed"


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the API (trailing 'Z' allowed)"""
    if isinstance(value, datetime):
        return value
    if value and isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _parse_number(value: Any) -> float:
    """Durations and counters: anything non-numeric counts as zero"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0
    return 0


def _record_id(data: Dict[str, Any]) -> Optional[str]:
    """Mongo documents carry `_id`; plain dicts may use `id`"""
    record_id = data.get('_id', data.get('id'))
    return str(record_id) if record_id is not None else None


@dataclass
class Task:
    """Task data model"""
    id: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    status: str = TASK_PENDING  # 'Pending', 'In Progress', 'Completed', 'Revise Again'
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tags: List[str] = field(default_factory=list)
    pomodoro_count: int = 0
    actual_time: int = 0  # minutes

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Create Task from an API document"""
        tags = data.get('tags')
        return cls(
            id=_record_id(data),
            title=data.get('title') or '',
            description=data.get('description'),
            status=data.get('status') or TASK_PENDING,
            due_date=parse_datetime(data.get('dueDate', data.get('due_date'))),
            completed_at=parse_datetime(data.get('completedAt', data.get('completed_at'))),
            created_at=parse_datetime(data.get('createdAt', data.get('created_at'))),
            updated_at=parse_datetime(data.get('updatedAt', data.get('updated_at'))),
            tags=[str(t) for t in tags] if isinstance(tags, list) else [],
            pomodoro_count=int(_parse_number(data.get('pomodoroCount'))),
            actual_time=int(_parse_number(data.get('actualTime'))),
        )

    @property
    def is_completed(self) -> bool:
        return self.status == TASK_COMPLETED

    @property
    def completion_time(self) -> Optional[datetime]:
        """When the task was completed, falling back to its last update"""
        return self.completed_at or self.updated_at


@dataclass
class PomodoroSession:
    """Pomodoro session data model"""
    id: Optional[str] = None
    status: str = SESSION_IN_PROGRESS  # 'In Progress', 'Paused', 'Completed'
    duration: float = 0  # seconds
    created_at: Optional[datetime] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    task_id: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PomodoroSession':
        """Create PomodoroSession from an API document"""
        task_id = data.get('taskId', data.get('task_id'))
        if isinstance(task_id, dict):
            # Populated reference
            task_id = _record_id(task_id)
        return cls(
            id=_record_id(data),
            status=data.get('status') or SESSION_IN_PROGRESS,
            duration=_parse_number(data.get('duration')),
            created_at=parse_datetime(data.get('createdAt', data.get('created_at'))),
            start_time=parse_datetime(data.get('startTime')),
            end_time=parse_datetime(data.get('endTime')),
            task_id=str(task_id) if task_id is not None else None,
            notes=data.get('notes'),
        )

    @property
    def is_completed(self) -> bool:
        return self.status == SESSION_COMPLETED


@dataclass
class ActivityEntry:
    """Single item of the dashboard activity feed (derived, never stored)"""
    id: Optional[str]
    type: str  # 'task_completed', 'pomodoro_completed', 'task_created'
    title: str
    description: str
    timestamp: datetime
    icon: str
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
            "icon": self.icon,
            "color": self.color,
        }


def coerce_tasks(items: Any) -> List[Task]:
    """
    Normalize raw task input into Task models.

    Accepts Task instances or API dicts; anything else (including a
    non-list collection) is dropped.
    """
    return _coerce(items, Task)


def coerce_sessions(items: Any) -> List[PomodoroSession]:
    """Normalize raw session input into PomodoroSession models"""
    return _coerce(items, PomodoroSession)


def _coerce(items: Any, model) -> list:
    if not isinstance(items, (list, tuple)):
        return []
    result = []
    for item in items:
        if isinstance(item, model):
            result.append(item)
        elif isinstance(item, dict):
            result.append(model.from_dict(item))
    return result
