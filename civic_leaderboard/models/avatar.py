from typing import Annotated, Literal, Union
from pydantic import BaseModel, Field


class PlaceholderAvatar(BaseModel):
    """Emoji or short text shown instead of a picture"""

    kind: Literal["placeholder"] = "placeholder"
    text: str

    class Config:
        frozen = True


class ImageUrlAvatar(BaseModel):
    """Remote picture"""

    kind: Literal["image_url"] = "image_url"
    url: str

    class Config:
        frozen = True


AvatarReference = Annotated[
    Union[PlaceholderAvatar, ImageUrlAvatar],
    Field(discriminator="kind"),
]
