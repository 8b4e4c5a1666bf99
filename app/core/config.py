"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, chemin DB, logs, CORS, exports…)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings par défaut, que create_app() utilise si on ne lui en passe pas :

from app.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Commandes-Back"
    ENV: str = "dev"  # dev | prod | test

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "orders.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None
    SQL_ECHO: Optional[bool] = None  # auto selon ENV si None

    # -----------------------------
    # Logs / HTTP
    # -----------------------------
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # -----------------------------
    # Exports
    # -----------------------------
    CURRENCY_SUFFIX: str = "DH"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # echo SQL seulement en dev si non spécifié
        if self.SQL_ECHO is None:
            object.__setattr__(self, "SQL_ECHO", self.ENV == "dev")


# Instance par défaut (lue une fois au démarrage du process)
settings = Settings()
