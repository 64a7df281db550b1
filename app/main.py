"""
➡️ But : assembler toutes les pièces du puzzle côté backend.

Crée l’instance FastAPI (app).

Configure :

CORS (autorisations de qui peut appeler ces API)

logs, titre, version, tags

schéma OpenAPI personnalisé

Inclut les routers (ex : /api/v1/game-boards).

Initialise la base au démarrage (@app.on_event("startup")).

🔹 Point unique d’exécution : uvicorn app.main:app --reload.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import configure_logging
from app.core.openapi import custom_openapi
from app.db.session import init_db

from app.api.v1.routers import authentication, game_boards, game_sessions, themes

import uvicorn

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_tags=[
        {"name": "auth", "description": "Comptes, sessions et profil"},
        {"name": "game_boards", "description": "Plateaux de quiz (table game_boards)"},
        {"name": "game_sessions", "description": "Parties jouées (table game_sessions)"},
        {"name": "themes", "description": "Thèmes intégrés"},
    ],
)

# CORS (ajustez selon vos besoins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

# Routers
app.include_router(authentication.router, prefix="/api/v1")
app.include_router(game_boards.router, prefix="/api/v1")
app.include_router(game_sessions.router, prefix="/api/v1")
app.include_router(themes.router, prefix="/api/v1")

# Génération du schéma OpenAPI custom (facultatif, mais propre)
app.openapi = lambda: custom_openapi(app)

# Démarrage
@app.on_event("startup")
def on_startup():
    init_db()

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
