"""
Domain models — Pydantic types for install results.

    from wavu.core.models import InstallReport, TaskOutcome
"""

from wavu.core.models.outcome import InstallReport, TaskOutcome

__all__ = [
    "InstallReport",
    "TaskOutcome",
]
