"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description détaillée,

documenter les conventions communes (format des erreurs, statuts).

🔹 Avantages :

La doc est toujours complète et cohérente.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API de gestion des commandes et des clients (FastAPI + SQLite).\n\n"
            "### Conventions\n"
            "- Les erreurs sont renvoyées sous la forme `{\"error\": \"message\"}`.\n"
            "- Statuts de commande possibles : `Expédiée`, `Livrée`.\n"
            "- Un client est lié à ses commandes par son email (`email_client`).\n"
            "- Les dates sont en UTC.\n"
        ),
        routes=app.routes,
        tags=app.openapi_tags,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
