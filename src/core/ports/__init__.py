"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

- IAIProvider : Fournisseur IA (analyse et vérification d'appariements)
- IFileSystem : Renommage, copie, déplacement et sauvegarde de fichiers
- IWorkerPool, TaskResult : Exécution des unités de travail de relocalisation
"""

from src.core.ports.ai_provider import IAIProvider
from src.core.ports.file_system import IFileSystem
from src.core.ports.worker_pool import IWorkerPool, Task, TaskResult

__all__ = [
    "IAIProvider",
    "IFileSystem",
    "IWorkerPool",
    "Task",
    "TaskResult",
]
