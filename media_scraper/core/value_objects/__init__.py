"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaKind : Type de media (TV, MOVIE, UNKNOWN)
- ParsedInfo : Informations extraites du parsing d'un nom de fichier
- PlanActionType, PlanAction, ImpactSummary, ReconciliationPlan : plan de reconciliation
"""

from media_scraper.core.value_objects.parsed_info import MediaKind, ParsedInfo
from media_scraper.core.value_objects.plan import (
    ImpactSummary,
    PlanAction,
    PlanActionType,
    ReconciliationPlan,
)

__all__ = [
    "MediaKind",
    "ParsedInfo",
    "PlanActionType",
    "PlanAction",
    "ImpactSummary",
    "ReconciliationPlan",
]
