import asyncio
from typing import Awaitable, Set

from journey.core.logger import logger


class NotificationDispatcher:
    """
    Runs email sends as detached tasks.

    The request path only schedules the send; its outcome ends up in the log
    and is never reported back to the caller.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def dispatch(self, send: Awaitable[None], event: str, **context) -> asyncio.Task:
        task = asyncio.create_task(self._run(send, event, context))
        # keep a reference until done so the task is not garbage collected
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, send: Awaitable[None], event: str, context: dict) -> None:
        try:
            await send
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Failed to send email on {event}: {e} {context}")
        else:
            logger.info(f"Email sent on {event} {context}")

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for in-flight sends, used on shutdown."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
