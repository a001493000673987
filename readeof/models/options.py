"""Read and stream option models."""

import codecs
from pydantic import BaseModel, Field, field_validator

from ..config import settings


class ReadOptions(BaseModel):
    """Options for a one-shot read of the last lines of a file."""

    encoding: str = Field(default_factory=lambda: settings.encoding, description="Text encoding")
    errors: str = Field(default_factory=lambda: settings.decode_errors, description="Codec error handler")
    buffer_size: int = Field(default_factory=lambda: settings.buffer_size, ge=1, description="Chunk size in bytes")

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v):
        """Encoding must name a registered codec."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v

    @field_validator('errors')
    @classmethod
    def validate_errors(cls, v):
        """Error handler must be registered with the codecs module."""
        try:
            codecs.lookup_error(v)
        except LookupError:
            raise ValueError(f"Unknown codec error handler: {v}")
        return v

    @classmethod
    def resolve(cls, **overrides) -> "ReadOptions":
        """Build options from keyword overrides, taking settings for any left as None."""
        return cls(**{key: value for key, value in overrides.items() if value is not None})

    def decode(self, data: bytes) -> str:
        return data.decode(self.encoding, self.errors)


class StreamOptions(ReadOptions):
    """Options for reading the last lines and then following the file."""

    poll_interval: float = Field(
        default_factory=lambda: settings.poll_interval,
        gt=0,
        description="Seconds to wait between polls"
    )
