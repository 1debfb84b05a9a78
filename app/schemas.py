"""Request/response schemas for the command bridge."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

Byte = Annotated[int, Field(ge=0, le=255)]


class ErrorDetail(BaseModel):
    """Error detail structure for failed commands."""

    type: str = Field(description="Error type identifier")
    message: str = Field(description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Structured error response format."""

    error: ErrorDetail = Field(description="Error details")


class TranscribeAudioArgs(BaseModel):
    """Arguments of the transcribe_audio command.

    The credential's wire name is ``apiKey``, matching the front end.
    """

    model_config = ConfigDict(extra="ignore")

    audio: list[Byte] = Field(description="Recorded clip as a list of byte values")
    api_key: str = Field(alias="apiKey", description="Bearer token for the transcription API")

    @property
    def audio_bytes(self) -> bytes:
        return bytes(self.audio)


class WriteDataFileArgs(BaseModel):
    """Arguments of the write_data_file command."""

    model_config = ConfigDict(extra="ignore")

    contents: str = Field(description="Full state file contents")


class CommandResponse(BaseModel):
    """Successful command result."""

    result: Any = Field(default=None, description="Command return value")
