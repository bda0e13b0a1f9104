"""
Couche application (cas d'utilisation).

- file_id : identifiants deterministes des fichiers
- discovery : decouverte et classification des fichiers
- planner : operations sans conflit a partir des appariements IA
- match_cache : cache des plans calcules en dry-run
- relocator : execution des operations via le pool de workers
- match_service : orchestration de la commande match

Les services dependent des ports de core/, jamais des adaptateurs concrets.
"""
