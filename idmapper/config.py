"""Configuration for the namespace registry and the bundled backends."""

import os
from enum import Enum

from pydantic import BaseModel, Field


class CollisionPolicy(str, Enum):
    """What to do when bootstrap data assigns a known code to a different name."""

    WARN = "warn"
    """Keep the first namespace unchanged and log a warning."""

    REJECT = "reject"
    """Raise NamespaceCollisionError."""


class SqlConfig(BaseModel):
    query_timeout: float = Field(default=5.0, ge=0.0, description="SQLite busy timeout in seconds")
    echo: bool = Field(default=False, description="Log every SQL statement")


class IDMapperConfig(BaseModel):
    collision_policy: CollisionPolicy = CollisionPolicy.WARN
    sql: SqlConfig = SqlConfig()
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "IDMapperConfig":
        """Build a config from IDMAPPER_* environment variables, falling back to defaults."""
        values: dict = {}
        sql: dict = {}
        if policy := os.getenv("IDMAPPER_COLLISION_POLICY"):
            values["collision_policy"] = policy.lower()
        if timeout := os.getenv("IDMAPPER_SQL_QUERY_TIMEOUT"):
            sql["query_timeout"] = timeout
        if echo := os.getenv("IDMAPPER_SQL_ECHO"):
            sql["echo"] = echo.lower() in ("1", "true", "yes", "on")
        if level := os.getenv("IDMAPPER_LOG_LEVEL"):
            values["log_level"] = level.upper()
        if sql:
            values["sql"] = SqlConfig(**sql)
        return cls(**values)
