"""
Tests unitaires pour les identifiants de fichiers.

Ces tests verifient:
- Le format file_ + 16 hex (21 caracteres)
- Le determinisme pour un meme (chemin, taille)
- L'absence de collision sur 10 000 entrees distinctes
- La normalisation des separateurs et les noms non-ASCII
"""

from src.services.file_id import generate_file_id, is_file_id


class TestGenerateFileId:
    """Tests pour generate_file_id."""

    def test_format(self) -> None:
        """L'identifiant fait 21 caracteres: prefixe + 16 hex minuscules."""
        file_id = generate_file_id("Season 1/Show.S01E01.mkv", 1_234_567)

        assert len(file_id) == 21
        assert file_id.startswith("file_")
        assert is_file_id(file_id)

    def test_deterministic(self) -> None:
        """Meme chemin et meme taille donnent le meme identifiant."""
        first = generate_file_id("movie.srt", 42)
        second = generate_file_id("movie.srt", 42)

        assert first == second

    def test_size_changes_id(self) -> None:
        """Une taille differente change l'identifiant."""
        assert generate_file_id("movie.srt", 42) != generate_file_id("movie.srt", 43)

    def test_path_changes_id(self) -> None:
        """Un chemin different change l'identifiant."""
        assert generate_file_id("a/movie.srt", 42) != generate_file_id("b/movie.srt", 42)

    def test_path_and_size_are_separated(self) -> None:
        """("a1", 2) et ("a", 12) ne produisent pas le meme identifiant."""
        assert generate_file_id("a1", 2) != generate_file_id("a", 12)

    def test_backslash_separators_normalized(self) -> None:
        """Les separateurs Windows donnent le meme identifiant que '/'."""
        assert generate_file_id("sub\\movie.srt", 10) == generate_file_id("sub/movie.srt", 10)

    def test_non_ascii_path(self) -> None:
        """Les noms non-ASCII produisent un identifiant valide."""
        file_id = generate_file_id("Amélie/Le Fabuleux Destin d'Amélie Poulain.srt", 2048)

        assert is_file_id(file_id)

    def test_no_collisions_over_ten_thousand_inputs(self) -> None:
        """10 000 entrees distinctes donnent 10 000 identifiants distincts."""
        ids = {
            generate_file_id(f"Show/Season {i % 20}/episode_{i}.srt", 1000 + i)
            for i in range(10_000)
        }

        assert len(ids) == 10_000


class TestIsFileId:
    """Tests pour is_file_id."""

    def test_rejects_uppercase(self) -> None:
        assert not is_file_id("file_0123456789ABCDEF")

    def test_rejects_wrong_length(self) -> None:
        assert not is_file_id("file_0123")

    def test_rejects_missing_prefix(self) -> None:
        assert not is_file_id("0123456789abcdef")
