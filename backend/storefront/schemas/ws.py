from typing import Literal

from pydantic import BaseModel, Field


class MessageFromClientIn(BaseModel):
    type: Literal["message-from-client"]
    message: str = Field(min_length=1, max_length=2000)
