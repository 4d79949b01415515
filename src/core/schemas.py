from pydantic import BaseModel, ConfigDict


class Base(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="forbid")


class SuccessResponse(Base):
    success: bool
