"""
Identifiants de fichiers deterministes.

L'identifiant d'un fichier est derive de son chemin relatif a la racine
du scan et de sa taille, via XXH3-64 :

    file_ + 16 caracteres hexadecimaux (21 caracteres au total)

Il est stable d'une execution a l'autre et c'est la seule reference de
fichier transmise au fournisseur IA : les chemins longs, les caracteres
speciaux ou non-ASCII ne traversent jamais le protocole.
"""

import re

import xxhash

FILE_ID_PREFIX = "file_"
FILE_ID_PATTERN = re.compile(r"^file_[0-9a-f]{16}$")


def generate_file_id(relative_path: str, size: int) -> str:
    """
    Calcule l'identifiant d'un fichier.

    Args :
        relative_path : Chemin relatif a la racine du scan
        size : Taille du fichier en octets

    Retourne :
        Identifiant "file_<16 hex>"
    """
    hasher = xxhash.xxh3_64()
    hasher.update(relative_path.replace("\\", "/").encode("utf-8"))
    # Separateur pour que ("a1", 2) et ("a", 12) ne se confondent pas
    hasher.update(b"\x00")
    hasher.update(str(size).encode())
    return FILE_ID_PREFIX + hasher.hexdigest()


def is_file_id(value: str) -> bool:
    """Verifie qu'une chaine a le format d'un identifiant de fichier."""
    return bool(FILE_ID_PATTERN.match(value))
