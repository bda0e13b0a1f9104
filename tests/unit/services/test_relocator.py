"""
Tests unitaires pour RelocatorService.

Tests couvrant:
- Dry-run: aucune mutation, aucune soumission au pool
- Execution: une tache par operation, resultats dans l'ordre
- Isolation des echecs: une operation en echec n'arrete pas les autres
- Sauvegardes: source (renommage/deplacement) et cible existante
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.adapters.file_system import FileSystemAdapter
from src.adapters.worker_pool import AsyncioWorkerPool
from src.core.ports.worker_pool import IWorkerPool
from src.core.value_objects import MatchOperation, RelocationMode
from src.services.relocator import RelocatorService


def make_op(source: Path, target: Path, mode: RelocationMode) -> MatchOperation:
    return MatchOperation(
        subtitle_path=source,
        target_path=target,
        video_path=target.with_suffix(".mkv"),
        mode=mode,
        confidence=0.9,
    )


class TestDryRun:
    """Le dry-run ne touche a rien."""

    @pytest.mark.asyncio
    async def test_no_submission_and_no_mutation(self, mock_file_system) -> None:
        pool = MagicMock(spec=IWorkerPool)
        pool.submit_batch = AsyncMock()
        relocator = RelocatorService(mock_file_system, pool, backup_enabled=True)
        ops = [make_op(Path("/a/x.srt"), Path("/a/target.srt"), RelocationMode.MOVE)]

        results = await relocator.execute(ops, dry_run=True)

        pool.submit_batch.assert_not_called()
        mock_file_system.move.assert_not_called()
        mock_file_system.backup.assert_not_called()
        assert results[0].success and results[0].dry_run
        assert results[0].message.startswith("Apercu: ")
        assert "x.srt" in results[0].message


class TestExecution:
    """Execution reelle avec le systeme de fichiers."""

    @pytest.mark.asyncio
    async def test_rename_copy_move(self, tmp_path: Path) -> None:
        (tmp_path / "videos").mkdir()
        for name in ("a.srt", "b.srt", "c.srt"):
            (tmp_path / name).write_text(name)
        ops = [
            make_op(tmp_path / "a.srt", tmp_path / "movie.srt", RelocationMode.RENAME),
            make_op(tmp_path / "b.srt", tmp_path / "videos" / "movie.srt", RelocationMode.COPY),
            make_op(tmp_path / "c.srt", tmp_path / "videos" / "movie.1.srt", RelocationMode.MOVE),
        ]
        relocator = RelocatorService(FileSystemAdapter(), AsyncioWorkerPool(max_workers=3))

        results = await relocator.execute(ops)

        assert all(r.success for r in results)
        assert [r.operation for r in results] == ops
        assert (tmp_path / "movie.srt").read_text() == "a.srt"
        assert not (tmp_path / "a.srt").exists()
        assert (tmp_path / "videos" / "movie.srt").read_text() == "b.srt"
        assert (tmp_path / "b.srt").exists()
        assert (tmp_path / "videos" / "movie.1.srt").read_text() == "c.srt"
        assert not (tmp_path / "c.srt").exists()

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, tmp_path: Path) -> None:
        """Une source absente echoue sans empecher les autres operations."""
        (tmp_path / "ok.srt").write_text("ok")
        ops = [
            make_op(tmp_path / "missing.srt", tmp_path / "m1.srt", RelocationMode.RENAME),
            make_op(tmp_path / "ok.srt", tmp_path / "m2.srt", RelocationMode.RENAME),
        ]
        relocator = RelocatorService(FileSystemAdapter(), AsyncioWorkerPool())

        results = await relocator.execute(ops)

        assert results[0].success is False
        assert "missing.srt" in results[0].error
        assert "rename" in results[0].error
        assert results[1].success is True
        assert (tmp_path / "m2.srt").exists()

    @pytest.mark.asyncio
    async def test_existing_target_without_backup_fails(self, tmp_path: Path) -> None:
        """Une cible apparue apres la planification n'est jamais ecrasee."""
        (tmp_path / "x.srt").write_text("new")
        (tmp_path / "movie.srt").write_text("old")
        ops = [make_op(tmp_path / "x.srt", tmp_path / "movie.srt", RelocationMode.RENAME)]
        relocator = RelocatorService(FileSystemAdapter(), AsyncioWorkerPool())

        [result] = await relocator.execute(ops)

        assert result.success is False
        assert (tmp_path / "movie.srt").read_text() == "old"

    @pytest.mark.asyncio
    async def test_backup_of_source_and_existing_target(self, tmp_path: Path) -> None:
        (tmp_path / "x.srt").write_text("new")
        (tmp_path / "movie.srt").write_text("old")
        ops = [make_op(tmp_path / "x.srt", tmp_path / "movie.srt", RelocationMode.MOVE)]
        relocator = RelocatorService(FileSystemAdapter(), AsyncioWorkerPool(), backup_enabled=True)

        [result] = await relocator.execute(ops)

        assert result.success is True
        assert (tmp_path / "movie.srt").read_text() == "new"
        assert (tmp_path / "movie.srt.backup").read_text() == "old"
        assert (tmp_path / "x.srt.backup").read_text() == "new"

    @pytest.mark.asyncio
    async def test_earlier_backups_are_preserved(self, tmp_path: Path) -> None:
        (tmp_path / "x.srt").write_text("new")
        (tmp_path / "movie.srt").write_text("old")
        (tmp_path / "movie.srt.backup").write_text("older")
        (tmp_path / "x.srt.backup").write_text("previous run")
        ops = [make_op(tmp_path / "x.srt", tmp_path / "movie.srt", RelocationMode.RENAME)]
        relocator = RelocatorService(FileSystemAdapter(), AsyncioWorkerPool(), backup_enabled=True)

        [result] = await relocator.execute(ops)

        assert result.success is True
        assert (tmp_path / "movie.srt").read_text() == "new"
        assert (tmp_path / "movie.srt.backup").read_text() == "older"
        assert (tmp_path / "movie.srt.backup.1").read_text() == "old"
        assert (tmp_path / "x.srt.backup").read_text() == "previous run"
        assert (tmp_path / "x.srt.backup.1").read_text() == "new"

    @pytest.mark.asyncio
    async def test_copy_does_not_backup_source(self, mock_file_system) -> None:
        pool = AsyncioWorkerPool()
        relocator = RelocatorService(mock_file_system, pool)
        op = make_op(Path("/a/x.srt"), Path("/v/target.srt"), RelocationMode.COPY)

        [result] = await relocator.execute([op], backup=True)

        assert result.success is True
        mock_file_system.copy.assert_called_once_with(Path("/a/x.srt"), Path("/v/target.srt"))
        mock_file_system.backup.assert_not_called()

    @pytest.mark.asyncio
    async def test_one_task_per_operation(self, mock_file_system) -> None:
        pool = AsyncioWorkerPool()
        pool.submit_batch = AsyncMock(wraps=pool.submit_batch)
        relocator = RelocatorService(mock_file_system, pool)
        ops = [
            make_op(Path(f"/a/{i}.srt"), Path(f"/a/target{i}.srt"), RelocationMode.RENAME)
            for i in range(4)
        ]

        results = await relocator.execute(ops)

        pool.submit_batch.assert_awaited_once()
        assert len(pool.submit_batch.await_args.args[0]) == 4
        assert mock_file_system.rename.call_count == 4
        assert all(r.success for r in results)
