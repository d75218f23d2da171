"""In-process todo list with change notifications."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from .models import TodoItem, TodoStats

logger = logging.getLogger(__name__)

Listener = Callable[[], None]
_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TodoStore:
    """Owns a list of TodoItem objects and notifies subscribers on change.

    Unknown ids are ignored by every mutating method; listeners are only
    called when something actually changed.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._todos: List[TodoItem] = []
        self._next_id = 1
        self._listeners: List[Listener] = []
        self._clock = clock

    @classmethod
    def with_samples(cls, clock: Callable[[], datetime] = _utcnow) -> "TodoStore":
        store = cls(clock=clock)
        store.add(
            TodoItem(
                title="Welcome to your Todo List!",
                description="This is a sample todo item. You can check it off, edit it, or delete it.",
            )
        )
        store.add(
            TodoItem(
                title="Try adding a deadline",
                description="Todos with deadlines will show priority colors",
                deadline=clock() + timedelta(days=2),
            )
        )
        return store

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def add(self, todo: TodoItem) -> TodoItem:
        todo.validate()
        todo.id = self._next_id
        self._next_id += 1
        todo.created_at = self._clock()
        self._todos.append(todo)
        logger.debug("Added todo %d: %s", todo.id, todo.title)
        self._notify()
        return todo

    def update(self, todo: TodoItem) -> Optional[TodoItem]:
        existing = self.get(todo.id)
        if existing is None:
            logger.debug("Ignoring update for unknown todo %d", todo.id)
            return None
        # Validate on a copy so a bad update leaves the stored item untouched.
        candidate = replace(
            existing, title=todo.title, description=todo.description, deadline=todo.deadline
        )
        existing.title = candidate.title
        existing.description = candidate.description
        existing.deadline = candidate.deadline
        self._notify()
        return existing

    def toggle_complete(self, todo_id: int) -> Optional[TodoItem]:
        todo = self.get(todo_id)
        if todo is None:
            return None
        todo.is_completed = not todo.is_completed
        todo.completed_at = self._clock() if todo.is_completed else None
        self._notify()
        return todo

    def delete(self, todo_id: int) -> bool:
        todo = self.get(todo_id)
        if todo is None:
            return False
        self._todos.remove(todo)
        logger.debug("Deleted todo %d", todo_id)
        self._notify()
        return True

    def get(self, todo_id: int) -> Optional[TodoItem]:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    def all(self) -> List[TodoItem]:
        return sorted(self._todos, key=lambda todo: todo.created_at, reverse=True)

    def active(self) -> List[TodoItem]:
        # Newest first, then a stable sort by deadline keeps that order on ties.
        newest_first = sorted(
            (todo for todo in self._todos if not todo.is_completed),
            key=lambda todo: todo.created_at,
            reverse=True,
        )
        return sorted(newest_first, key=lambda todo: todo.deadline or _FAR_FUTURE)

    def completed(self) -> List[TodoItem]:
        return sorted(
            (todo for todo in self._todos if todo.is_completed),
            key=lambda todo: todo.completed_at or todo.created_at,
            reverse=True,
        )

    def overdue(self, now: Optional[datetime] = None) -> List[TodoItem]:
        now = now or self._clock()
        return [todo for todo in self._todos if _is_overdue(todo, now)]

    def stats(self, now: Optional[datetime] = None) -> TodoStats:
        now = now or self._clock()
        completed = sum(1 for todo in self._todos if todo.is_completed)
        return TodoStats(
            total=len(self._todos),
            active=len(self._todos) - completed,
            completed=completed,
            overdue=sum(1 for todo in self._todos if _is_overdue(todo, now)),
        )

    def __len__(self) -> int:
        return len(self._todos)


def _is_overdue(todo: TodoItem, now: datetime) -> bool:
    return todo.deadline is not None and todo.deadline < now and not todo.is_completed
