"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

Le schéma généré par FastAPI est complété par les conventions communes
aux tables exposées (filtres, tri, pagination, visibilité).
"""

from fastapi.openapi.utils import get_openapi

TABLE_CONVENTIONS = (
    "Backend des plateaux de quiz : identité + tables `game_boards` / `game_sessions`.\n\n"
    "### Conventions\n"
    "- Toutes les heures sont en UTC (ISO 8601).\n"
    "- Filtres : query params `colonne=eq.valeur` (ex: `user_id=eq.42`), colonne inconnue → 400.\n"
    "- Tri : `order=colonne.desc` ou `order=colonne.asc`.\n"
    "- Pagination : `limit` / `offset` (sans `limit` : toutes les lignes visibles).\n"
    "- Visibilité : une ligne n'est visible que par son propriétaire "
    "(une partie, par le propriétaire de son plateau).\n"
    "- PATCH / DELETE sur la collection exigent au moins un filtre.\n"
    "- Auth : header `Authorization: Bearer <access_token>`.\n"
)


def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=TABLE_CONVENTIONS,
        routes=app.routes,
        tags=app.openapi_tags,
    )
    app.openapi_schema = schema
    return app.openapi_schema
