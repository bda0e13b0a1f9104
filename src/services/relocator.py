"""
Service de relocalisation des sous-titres.

Chaque MatchOperation devient une unite de travail independante soumise
au pool de workers : renommage sur place, copie ou deplacement a cote de
la video, eventuellement precede d'une sauvegarde. Les cibles ont ete
rendues uniques a la planification, aucun verrou n'est donc necessaire
entre workers.

En dry-run, aucune mutation du systeme de fichiers et aucune soumission
au pool : chaque operation est seulement decrite.
"""

from typing import Optional

from loguru import logger

from src.core.ports.file_system import IFileSystem
from src.core.ports.worker_pool import IWorkerPool, Task
from src.core.value_objects import MatchOperation, RelocationMode, RelocationResult

_VERBS = {
    RelocationMode.RENAME: "Renomme",
    RelocationMode.COPY: "Copie",
    RelocationMode.MOVE: "Deplace",
}


def describe_operation(operation: MatchOperation) -> str:
    """Description lisible d'une operation (source -> cible)."""
    return f"{operation.subtitle_path} -> {operation.target_path}"


class RelocatorService:
    """
    Execute les operations planifiees et rapporte le resultat de chacune.

    Un echec (source absente, permission refusee, cible apparue entre-temps)
    n'interrompt jamais les autres operations du lot.
    """

    def __init__(
        self,
        file_system: IFileSystem,
        worker_pool: IWorkerPool,
        backup_enabled: bool = False,
    ) -> None:
        self._file_system = file_system
        self._worker_pool = worker_pool
        self._backup_enabled = backup_enabled

    async def execute(
        self,
        operations: list[MatchOperation],
        dry_run: bool = False,
        backup: Optional[bool] = None,
    ) -> list[RelocationResult]:
        """
        Execute (ou simule) les operations.

        Args:
            operations: Operations sans conflit, dans l'ordre du plan
            dry_run: Simuler sans rien modifier
            backup: Force la sauvegarde (defaut: configuration du service)

        Returns:
            Un RelocationResult par operation, dans le meme ordre
        """
        if dry_run:
            return [
                RelocationResult(
                    operation=op,
                    success=True,
                    dry_run=True,
                    message=f"Apercu: {describe_operation(op)}",
                )
                for op in operations
            ]

        use_backup = self._backup_enabled if backup is None else backup
        tasks = [self._make_task(op, use_backup) for op in operations]
        task_results = await self._worker_pool.submit_batch(tasks)

        results = []
        for operation, task_result in zip(operations, task_results):
            if task_result.success:
                results.append(
                    RelocationResult(operation=operation, success=True, message=task_result.message)
                )
            else:
                error = (
                    f"{operation.mode.value} {operation.subtitle_name} -> "
                    f"{operation.target_name}: {task_result.message}"
                )
                logger.error("Echec de relocalisation", error=error)
                results.append(RelocationResult(operation=operation, success=False, error=error))

        succeeded = sum(1 for r in results if r.success)
        logger.info("Relocalisation terminee", succeeded=succeeded, failed=len(results) - succeeded)
        return results

    def _make_task(self, operation: MatchOperation, backup: bool) -> Task:
        def task() -> str:
            return self.apply(operation, backup)

        return task

    def apply(self, operation: MatchOperation, backup: bool = False) -> str:
        """
        Applique une operation (appele depuis un worker).

        Raises:
            OSError: Source absente, cible existante sans sauvegarde, permission...
        """
        fs = self._file_system
        source, target = operation.subtitle_path, operation.target_path

        if not fs.exists(source):
            raise FileNotFoundError(f"source introuvable: {source}")

        if fs.exists(target):
            if not backup:
                raise FileExistsError(f"la cible existe deja: {target}")
            saved = fs.backup(target)
            logger.debug("Cible sauvegardee avant remplacement", backup=str(saved))

        if backup and operation.mode is not RelocationMode.COPY:
            saved = fs.backup(source)
            logger.debug("Source sauvegardee", backup=str(saved))

        if operation.mode is RelocationMode.RENAME:
            fs.rename(source, target)
        elif operation.mode is RelocationMode.COPY:
            fs.copy(source, target)
        else:
            fs.move(source, target)

        message = f"{_VERBS[operation.mode]}: {describe_operation(operation)}"
        logger.info(message)
        return message
