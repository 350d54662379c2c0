"""
Transition notifications.

The executor reports every status change of a task through a single callback
that receives a snapshot of the node after the change.
"""

import logging
from typing import Callable, List, Optional

from .dag import TaskNode

logger = logging.getLogger(__name__)

# Called once per transition, synchronously, with a copy of the node
TransitionObserver = Callable[[TaskNode], None]


class CompositeObserver:
    """
    Fans one transition out to several observers.

    An observer that raises is logged and skipped; the remaining observers
    still receive the transition.
    """

    def __init__(self, observers: Optional[List[TransitionObserver]] = None):
        self._observers: List[TransitionObserver] = list(observers or [])

    def add(self, observer: TransitionObserver) -> None:
        self._observers.append(observer)

    def __len__(self) -> int:
        return len(self._observers)

    def __call__(self, task: TaskNode) -> None:
        for observer in self._observers:
            try:
                observer(task)
            except Exception:
                logger.exception(
                    f"Observer {observer!r} failed on {task.id} -> {task.status.value}"
                )
