"""Day balancing endpoint - POST /balance."""

from fastapi import APIRouter, status

from backend.app.models.activity import BalanceRequest, BalanceResponse
from backend.app.planning.balance import balance_clusters_with_report

router = APIRouter(tags=["planning"])


@router.post("/balance", response_model=BalanceResponse, status_code=status.HTTP_200_OK)
async def balance(body: BalanceRequest) -> BalanceResponse:
    """Rebalance a day-partitioned activity set.

    The result is best effort: report.converged is False when some day is
    still outside bounds after the iteration ceiling or a stuck donor.
    A non-positive number_of_days is rejected by request validation (422).
    """
    clusters, report = balance_clusters_with_report(
        body.clusters, body.number_of_days, body.start
    )
    return BalanceResponse(clusters=clusters, report=report)
