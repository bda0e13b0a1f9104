"""
subpair - Appariement assisté par IA des sous-titres avec leurs vidéos.

Ce package découvre les fichiers d'un répertoire, demande à un modèle de langage
quel sous-titre correspond à quelle vidéo, puis renomme, copie ou déplace
les sous-titres à côté de leur vidéo.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (découverte, planification, cache, relocalisation)
- adapters/ : Couche infrastructure (CLI, clients IA, système de fichiers)
"""
