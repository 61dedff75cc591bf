"""
First Come First Served (FCFS) pending queue.

Jobs are admitted in the order they were submitted. Internally this is just
a FIFO of job ids (first in, first out).

Data structure: collections.deque
- enqueue: append to right  → O(1)
- dequeue: pop from left    → O(1)
- remove:  linear scan      → O(n), remaining ids keep their order

remove() exists for cancellation: a job cancelled while still queued has to
leave the queue so the scheduler never admits it.

The queue holds ids only. The Job records themselves live in JobRegistry,
which also owns the lock that guards this queue.
"""

from collections import deque
from typing import Optional


class FCFSQueue:

    def __init__(self):
        self._queue: deque[str] = deque()

    def enqueue(self, job_id: str) -> None:
        self._queue.append(job_id)

    def dequeue(self) -> Optional[str]:
        return self._queue.popleft() if self._queue else None

    def peek(self) -> Optional[str]:
        return self._queue[0] if self._queue else None

    def remove(self, job_id: str) -> bool:
        """Drop a job id from anywhere in the queue. Returns False if absent."""
        try:
            self._queue.remove(job_id)
        except ValueError:
            return False
        return True

    def size(self) -> int:
        return len(self._queue)

    def __contains__(self, job_id: str) -> bool:
        return job_id in self._queue

    def __len__(self) -> int:
        return len(self._queue)
