"""
Erreurs métier levées par les services.

Chaque type correspond à un code HTTP ; la traduction est faite une seule fois,
par les handlers enregistrés dans main.py.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Erreur métier générique (500 si aucun sous-type ne s'applique)."""
    status_code = 500

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}


class ValidationFailed(DomainError):
    """Champ obligatoire manquant ou mal formé."""
    status_code = 400


class Unauthorized(DomainError):
    """Aucune session valide."""
    status_code = 401


class NotFound(DomainError):
    status_code = 404


class Conflict(DomainError):
    """Contrainte d'unicité violée ou suppression bloquée."""
    status_code = 409
