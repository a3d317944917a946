"""
Objets valeur decrivant un plan de reconciliation.

Un plan est une donnee pure : la liste ordonnee des actions que le pipeline
effectuerait (deplacements, creation de repertoires, NFO, affiches) et un
resume d'impact. Le meme plan sert a la previsualisation et a l'execution.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class PlanActionType(str, Enum):
    """Type d'action d'un plan de reconciliation."""

    MOVE = "move"
    CREATE_NFO = "create-nfo"
    DOWNLOAD_POSTER = "download-poster"
    CREATE_DIR = "create-dir"


@dataclass(frozen=True)
class PlanAction:
    """
    Action unitaire d'un plan.

    Attributs:
        type: Type d'action
        destination: Chemin cible
        source: Chemin source (deplacements uniquement)
        will_overwrite: True si la destination existe deja
        content: Contenu NFO a ecrire (create-nfo)
        url: URL de l'image a telecharger (download-poster)
    """

    type: PlanActionType
    destination: Path
    source: Optional[Path] = None
    will_overwrite: bool = False
    content: Optional[str] = field(default=None, repr=False, compare=False)
    url: Optional[str] = field(default=None, repr=False, compare=False)


@dataclass
class ImpactSummary:
    """Resume des effets d'un plan sur le systeme de fichiers."""

    files_moving: int = 0
    nfo_creating: int = 0
    nfo_overwriting: int = 0
    posters_downloading: int = 0
    directories_creating: list[Path] = field(default_factory=list)


@dataclass
class ReconciliationPlan:
    """
    Plan de reconciliation : actions ordonnees et resume d'impact.

    Le resume est recalcule a chaque ajout pour rester coherent avec
    la liste des actions.
    """

    actions: list[PlanAction] = field(default_factory=list)
    impact_summary: ImpactSummary = field(default_factory=ImpactSummary)

    def add(self, action: PlanAction) -> None:
        """Ajoute une action et met a jour le resume d'impact."""
        self.actions.append(action)
        summary = self.impact_summary
        if action.type == PlanActionType.MOVE:
            summary.files_moving += 1
        elif action.type == PlanActionType.CREATE_NFO:
            if action.will_overwrite:
                summary.nfo_overwriting += 1
            else:
                summary.nfo_creating += 1
        elif action.type == PlanActionType.DOWNLOAD_POSTER:
            summary.posters_downloading += 1
        elif action.type == PlanActionType.CREATE_DIR:
            summary.directories_creating.append(action.destination)

    def to_dict(self) -> dict:
        """Representation serialisable du plan (sans contenu NFO)."""
        summary = self.impact_summary
        return {
            "actions": [
                {
                    "type": a.type.value,
                    "source": str(a.source) if a.source else None,
                    "destination": str(a.destination),
                    "will_overwrite": a.will_overwrite,
                }
                for a in self.actions
            ],
            "impact_summary": {
                "files_moving": summary.files_moving,
                "nfo_creating": summary.nfo_creating,
                "nfo_overwriting": summary.nfo_overwriting,
                "posters_downloading": summary.posters_downloading,
                "directories_creating": [str(d) for d in summary.directories_creating],
            },
        }
