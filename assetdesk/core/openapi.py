"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) ajoute une description détaillée (rôles, conventions d'erreurs)
au schéma généré par FastAPI.
"""

from fastapi.openapi.utils import get_openapi


def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API d'administration du parc informatique : employés, services, équipements, "
            "interventions, maintenances, licences et déclarations d'incidents.\n\n"
            "### Conventions\n"
            "- Authentification : `Authorization: Bearer <token>` (obtenu via `POST /login`).\n"
            "- Deux rôles : `Admin` (accès complet) et `Employer` (ses propres données).\n"
            "- Erreurs : 401 non authentifié, 403 interdit, 404 introuvable, "
            "422 validation (`errors` par champ), 500 transaction annulée.\n"
            "- Toutes les heures sont en UTC.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
