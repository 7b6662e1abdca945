from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every wire schema.
    Attributes are snake_case in Python and camelCase in JSON; both are accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class HealthStatus(BaseModel):
    status: str


class CompanyLoginRequest(BaseModel):
    email: str = Field(..., min_length=3)


class UserLoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
