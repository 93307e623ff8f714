"""Activity models for day balancing."""

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import Coordinate


class Activity(BaseModel):
    """Geo-located candidate place for one trip day.

    Immutable once produced upstream. A day cluster owns it exclusively until
    the balancer moves it, whole, to another day.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    category: str | None = None
    suggested_duration: int | None = Field(None, ge=0, description="Minutes")

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(lat=self.latitude, lng=self.longitude)


# One trip day; order is insertion order and carries no meaning.
DayCluster = list[Activity]


class BalanceRequest(BaseModel):
    """Request body for POST /balance."""

    clusters: list[list[Activity]]
    number_of_days: int = Field(..., gt=0)
    start: Coordinate


class BalanceReport(BaseModel):
    """Outcome of one balancing run."""

    target_per_day: int
    min_per_day: int
    max_per_day: int
    iterations: int
    moves: int
    sizes: list[int]
    converged: bool = Field(..., description="True when every day ends within bounds")


class BalanceResponse(BaseModel):
    """Response body for POST /balance."""

    clusters: list[list[Activity]]
    report: BalanceReport
