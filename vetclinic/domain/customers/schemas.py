"""Customer domain schemas - Pydantic models"""

from pydantic import BaseModel, ConfigDict


class CustomerDTO(BaseModel):
    """Customer as used inside the service layer (includes the PIN)"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    pin: int
    name: str
    surname: str


class CustomerResponse(BaseModel):
    """Customer as exposed over the API"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    surname: str
