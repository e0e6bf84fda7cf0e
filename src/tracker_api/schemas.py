#########################################
# --- Handler results and envelopes --- #
#########################################

from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field

from tracker_api.errors import ErrorKind


class Ok(BaseModel):
    """Successful handler outcome."""
    message: str
    data: Dict[str, str] = Field(default_factory=dict)

    def envelope(self) -> dict:
        return {"message": self.message, **self.data}


class Err(BaseModel):
    """Failed handler outcome. Only `error` reaches the client."""
    kind: ErrorKind
    error: str

    def envelope(self) -> dict:
        return {"error": self.error}


HandlerResult = Union[Ok, Err]


class NormalizedRequest(BaseModel):
    """A request flattened to its discriminator plus string parameters."""
    action: str
    params: Dict[str, str] = Field(default_factory=dict)


class MessageEnvelope(BaseModel):
    """Response body of a successful `POST /`."""
    message: str

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {"message": "Meeting added successfully", "id": "BCIEINM001"}
        },
    )


class ErrorEnvelope(BaseModel):
    """Response body of a failed request."""
    error: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Unknown action: foo"}}
    )
