"""
Pool de workers base sur asyncio.

Chaque tache synchrone (operation fichier) est executee dans un thread via
asyncio.to_thread, avec un nombre de taches simultanees borne par un
semaphore. Une exception levee par une tache devient un TaskResult en
echec : les autres taches du lot continuent.
"""

import asyncio

from loguru import logger

from src.core.ports.worker_pool import IWorkerPool, Task, TaskResult


class AsyncioWorkerPool(IWorkerPool):
    """Execution concurrente et bornee des unites de travail."""

    def __init__(self, max_workers: int = 4) -> None:
        if max_workers < 1:
            raise ValueError("max_workers doit etre >= 1")
        self._max_workers = max_workers

    @property
    def max_workers(self) -> int:
        return self._max_workers

    async def _run(self, task: Task, semaphore: asyncio.Semaphore) -> TaskResult:
        async with semaphore:
            try:
                message = await asyncio.to_thread(task)
            except Exception as e:
                logger.warning("Echec d'une tache", error=str(e))
                return TaskResult(success=False, message=str(e))
            return TaskResult(success=True, message=message)

    async def submit(self, task: Task) -> TaskResult:
        return await self._run(task, asyncio.Semaphore(1))

    async def submit_batch(self, tasks: list[Task]) -> list[TaskResult]:
        """Execute le lot et retourne les resultats dans l'ordre de soumission."""
        if not tasks:
            return []
        semaphore = asyncio.Semaphore(self._max_workers)
        return list(await asyncio.gather(*(self._run(t, semaphore) for t in tasks)))
