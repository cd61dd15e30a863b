from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class URLCreate(BaseModel):
    url: str = Field(min_length=1)


class URLInfo(BaseModel):
    short_url: str
    redirect_url: str

    # serialized as shortUrl / redirectUrl
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ErrorResponse(BaseModel):
    error: str
