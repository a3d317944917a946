"""
MediaScraper - Organisation de mediatheque personnelle.

Ce package scanne une boite de reception de fichiers video, identifie
series et films depuis les noms de fichiers, les rapproche du catalogue
TMDB et reorganise les fichiers dans une arborescence canonique avec
fichiers NFO et affiches.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur)
- services/ : Couche application (scan, matching, reconciliation, taches)
- adapters/ : Couche infrastructure (CLI, systeme de fichiers, clients API)
"""

__version__ = "0.1.0"
