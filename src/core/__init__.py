"""
Couche domaine (core).

Contient les entités, ports (interfaces abstraites), objets valeur et exceptions.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (HTTP, fichiers, CLI).

Sous-packages :
- entities/ : MediaFile et sa classification
- ports/ : Contrats pour le fournisseur IA, le système de fichiers, le pool de workers
- value_objects/ : Requêtes et réponses IA, opérations d'appariement
"""
