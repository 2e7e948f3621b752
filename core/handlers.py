# core/handlers.py

import logging

from django.db import IntegrityError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def _status_for(exc):
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


def _contexte(context):
    """
    Opération, boutique et entité concernées, pour les logs.
    """
    view = context.get("view")
    request = context.get("request")
    user = getattr(request, "user", None)

    operation = "?"
    if view is not None:
        operation = f"{view.__class__.__name__}.{getattr(view, 'action', None) or getattr(request, 'method', '')}"

    return {
        "operation": operation,
        "boutique": getattr(user, "boutique_id", None),
        "entite": (context.get("kwargs") or {}).get("pk"),
    }


def exception_handler(exc, context):
    """
    EXCEPTION_HANDLER DRF.

    Corps de réponse : {"error": ..., "code": ..., "details": {...}}
    """

    if isinstance(exc, DomainError):
        return Response(
            {"error": exc.message, "code": exc.code, "details": exc.details},
            status=_status_for(exc),
        )

    if isinstance(exc, ProtectedError):
        return Response(
            {
                "error": "Suppression impossible : cet élément est encore utilisé.",
                "code": "conflit",
                "details": {"lies": len(exc.protected_objects)},
            },
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, IntegrityError):
        logger.warning("Contrainte d'intégrité violée (%s): %s", _contexte(context), exc)
        return Response(
            {"error": "Cet élément existe déjà.", "code": "doublon", "details": {}},
            status=status.HTTP_409_CONFLICT,
        )

    response = drf_exception_handler(exc, context)

    if response is not None:
        data = response.data
        message = data.get("detail") if isinstance(data, dict) else None
        response.data = {
            "error": str(message) if message else "Données invalides.",
            "code": getattr(exc, "default_code", "erreur"),
            "details": data if message is None else {},
        }
        return response

    ctx = _contexte(context)
    logger.exception(
        "Erreur inattendue opération=%s boutique=%s entite=%s",
        ctx["operation"], ctx["boutique"], ctx["entite"],
    )
    return Response(
        {"error": "Erreur interne du serveur", "code": "erreur_interne", "details": {}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
