"""
Couche infrastructure : stockage des donnees de l'application.
"""
