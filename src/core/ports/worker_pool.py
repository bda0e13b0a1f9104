"""
Interface port pour le pool de workers.

Le relocalisateur soumet chaque opération comme une unité de travail
indépendante. L'ordonnancement interne (priorités, équilibrage) n'est
pas exposé.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

# Une tâche est un callable synchrone qui retourne un message de réussite
Task = Callable[[], str]


@dataclass(frozen=True)
class TaskResult:
    """Résultat d'une unité de travail."""

    success: bool
    message: str


class IWorkerPool(ABC):
    """Exécute des tâches et retourne leurs résultats dans l'ordre de soumission."""

    @abstractmethod
    async def submit(self, task: Task) -> TaskResult:
        """Exécute une tâche unique."""
        ...

    @abstractmethod
    async def submit_batch(self, tasks: list[Task]) -> list[TaskResult]:
        """
        Exécute un lot de tâches.

        Retourne :
            Un TaskResult par tâche, dans l'ordre de la liste fournie
        """
        ...
