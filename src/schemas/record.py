from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """One row of the characters table."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Character name")
    portrayal: str = Field(..., description="Actor or voice actor")
    description: str = Field(..., description="Free-text description")
