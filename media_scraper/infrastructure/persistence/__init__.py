"""
Implementations des repositories.

Seules les taches sont stockees, et uniquement en memoire : elles
disparaissent au redemarrage du processus.
"""

from media_scraper.infrastructure.persistence.memory_task_repository import (
    InMemoryTaskRepository,
)

__all__ = ["InMemoryTaskRepository"]
