"""Visit details schemas"""

from datetime import time

from pydantic import BaseModel, ConfigDict


class TimingDetailsDTO(BaseModel):
    """A doctor's timing profile: visit length and opening hours"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    visit_duration_minutes: int
    opening_at: time
    closing_at: time
