"""Health payload: liveness, database reachability and the active token settings."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response body for GET /health.

    Token fields let operators confirm which signing algorithm and lifetime a
    node is running with; the secret itself is never reported.
    """

    status: Literal["ok"] = "ok"
    environment: str = Field(description="APP_ENV of this node (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against the credential store",
    )
    token_algorithm: str = Field(description="HMAC algorithm used to sign access tokens")
    token_lifetime_minutes: int = Field(description="Minutes until a newly issued token expires")
