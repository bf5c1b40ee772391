"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l'instance FastAPI (app).

Configure :

logs (niveau via LOG_LEVEL)

CORS (autorisations de qui peut appeler ces API)

traduction des erreurs métier en réponses JSON

schéma OpenAPI personnalisé

Inclut les routers sous /api/v1.

Initialise la base au démarrage (@app.on_event("startup")).

Point unique d'exécution : uvicorn assetdesk.main:app --reload.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assetdesk.core.config import settings
from assetdesk.core.errors import register_exception_handlers
from assetdesk.core.logging import configure_logging
from assetdesk.core.openapi import custom_openapi
from assetdesk.db.session import init_db

from assetdesk.api.v1.routers import (
    authentication,
    declarations,
    employers,
    equipments,
    interventions,
    licenses,
    maintenances,
    services,
    statistics,
)

import uvicorn

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version="0.0.1",
    openapi_tags=[
        {"name": "auth", "description": "Connexion, déconnexion, profil"},
        {"name": "services", "description": "Services / départements (admin)"},
        {"name": "employers", "description": "Comptes employés (admin)"},
        {"name": "equipments", "description": "Matériel (admin)"},
        {"name": "interventions", "description": "Interventions sur le matériel (admin)"},
        {"name": "maintenances", "description": "Maintenances liées aux interventions (admin)"},
        {"name": "licenses", "description": "Licences logicielles (admin)"},
        {"name": "declarations", "description": "Déclarations d'incidents (employés et admins)"},
        {"name": "statistics", "description": "Tableaux de bord"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
for module in (
    authentication,
    services,
    employers,
    equipments,
    interventions,
    maintenances,
    licenses,
    declarations,
    statistics,
):
    app.include_router(module.router, prefix="/api/v1")

app.openapi = lambda: custom_openapi(app)

# Démarrage
@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
