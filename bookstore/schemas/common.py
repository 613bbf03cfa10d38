from pydantic import BaseModel


# Body of successful deletes
class MessageResponse(BaseModel):
    message: str


# Body of the health probe
class HealthResponse(BaseModel):
    status: str
    database: str | None = None
    error: str | None = None
