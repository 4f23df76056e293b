"""Schemas shared across routers."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str
