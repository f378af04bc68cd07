from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    """
    Centralized application settings. Pydantic's BaseSettings will automatically
    load these from environment variables or a .env file.
    """
    # --- Application ---
    APP_NAME: str = Field("Org Hierarchy API", description="Title reported by the HTTP application.")
    CORS_ORIGINS: List[str] = Field(
        ["http://localhost", "http://localhost:3000"],
        description="Origins allowed to call the API from a browser."
    )
    OWNER_HEADER: str = Field("X-Owner-Id", description="Header carrying the authenticated tenant id.")
    HOST: str = Field("0.0.0.0", description="Interface the API server binds to.")
    PORT: int = Field(8000, description="Port the API server listens on.")

    # --- Storage ---
    STORE_BACKEND: Literal["memory", "neo4j"] = Field(
        "memory", description="Where reporting links and employees are read from."
    )
    EMPLOYEE_SEED_FILE: Optional[str] = Field(
        "employees.seed.json",
        description="JSON list of {owner, id, name} loaded into the memory backend's employee directory. Relative paths resolve from the project root."
    )

    # --- Neo4j Database Credentials ---
    NEO4J_URI: str = Field("bolt://localhost:7687", description="Bolt URI of the Neo4j server.")
    NEO4J_USERNAME: str = Field("neo4j", description="Neo4j user.")
    NEO4J_PASSWORD: str = Field("", description="Neo4j password.")
    NEO4J_DATABASE: Optional[str] = Field(None, description="Target database; the server default when unset.")

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", description="Level applied to every logger built by core.logger.")

    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

settings = Settings()
