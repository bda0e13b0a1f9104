"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- ai/ : Clients des fournisseurs IA (OpenAI, OpenRouter, Azure OpenAI)
- cli/ : Interface ligne de commande (Typer + Rich)
- file_system : Renommage, copie, déplacement et sauvegarde des sous-titres
- worker_pool : Exécution concurrente des opérations de relocalisation

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from src.adapters.file_system import FileSystemAdapter
from src.adapters.worker_pool import AsyncioWorkerPool

__all__ = [
    "AsyncioWorkerPool",
    "FileSystemAdapter",
]
