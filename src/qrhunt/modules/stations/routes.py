"""Station admin routes."""

from uuid import UUID

from fastapi import APIRouter, status

from qrhunt.core.auth import TenantAdmin
from qrhunt.modules.stations.schemas import StationCreate, StationResponse, StationUpdate
from qrhunt.modules.stations.services import StationSvc


router = APIRouter(prefix="/admin/stations", tags=["stations"])


@router.get("", response_model=list[StationResponse], summary="List stations")
async def list_stations(access: TenantAdmin, service: StationSvc) -> list[StationResponse]:
    """List the tenant's stations in puzzle order."""
    stations = await service.list_stations(access.tenant_id)
    return [StationResponse.model_validate(s) for s in stations]


@router.post(
    "",
    response_model=StationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a station",
)
async def create_station(
    data: StationCreate, access: TenantAdmin, service: StationSvc
) -> StationResponse:
    """Create a station on the current tenant."""
    station = await service.create_station(data, access.tenant_id)
    return StationResponse.model_validate(station)


@router.patch("/{station_id}", response_model=StationResponse, summary="Update a station")
async def update_station(
    station_id: UUID,
    data: StationUpdate,
    access: TenantAdmin,
    service: StationSvc,
) -> StationResponse:
    """Update station metadata."""
    station = await service.update_station(station_id, data, access.tenant_id)
    return StationResponse.model_validate(station)
