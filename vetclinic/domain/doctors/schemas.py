"""Doctor domain schemas"""

from pydantic import BaseModel, ConfigDict


class DoctorDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    title: str
    name: str
    surname: str
