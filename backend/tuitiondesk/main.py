"""
Point d'entrée principal de l'API TuitionDesk.
Démarrage : uvicorn tuitiondesk.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import tuitiondesk.models  # noqa: F401 (enregistre tous les modèles dans Base.metadata avant les routers)
from tuitiondesk.errors import DomainError
from tuitiondesk.routers import auth, finance, students, subjects, timeslots, timetable, users

logger = logging.getLogger(__name__)

app = FastAPI(
    title="TuitionDesk API",
    description="API du tableau de bord d'administration du centre de soutien scolaire",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# CORS : le tableau de bord tourne en local en développement (à restreindre en production).
# allow_credentials : le jeton de session circule dans un cookie.
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


app.include_router(auth.router)
app.include_router(students.router)
app.include_router(subjects.router)
app.include_router(timeslots.router)
app.include_router(timetable.router)
app.include_router(users.router)
app.include_router(finance.router)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Traduit les erreurs métier en code HTTP, corps {"error": ...} plus d'éventuels champs annexes."""
    if exc.status_code >= 500:
        logger.error("Erreur métier : %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message, **exc.extra})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps ou paramètres invalides → 400 avec le premier message d'erreur."""
    errors = exc.errors()
    message = "Requête invalide."
    if errors:
        first = errors[0]
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{location} : {first.get('msg')}" if location else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
    passe bien par CORSMiddleware (qui injecte les headers CORS).
    Le message d'origine est journalisé, jamais renvoyé au client.
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Une erreur interne est survenue."},
    )


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "TuitionDesk API", "version": "0.1.0"}
