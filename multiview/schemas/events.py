"""
Schemas Pydantic dos eventos publicados no canal em tempo real.
"""
from pydantic import BaseModel, Field
from typing import Optional

RECORDING_STATUS_UPDATE = "recording:statusUpdate"
RECORDING_PROGRESS = "recording:progress"
NOTIFICATION_NEW = "notification:new"


class EventSchema(BaseModel):
    """Base dos payloads: serializa com as chaves camelCase do cliente."""

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

    class Config:
        populate_by_name = True


class RecordingStatusEvent(EventSchema):
    """Payload de `recording:statusUpdate`."""
    recording_id: str = Field(..., alias="recordingId")
    status: str


class RecordingProgressEvent(EventSchema):
    """Payload de `recording:progress` (segundos inteiros decorridos)."""
    recording_id: str = Field(..., alias="recordingId")
    duration: int = Field(..., ge=0)


class NotificationEvent(EventSchema):
    """Payload de `notification:new`."""
    type: str
    stream_id: Optional[str] = Field(None, alias="streamId")


class RealtimeMessage(BaseModel):
    """Envelope enviado pelo WebSocket."""
    event: str
    data: dict
