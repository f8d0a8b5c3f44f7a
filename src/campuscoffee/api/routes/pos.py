"""Point-of-sale endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from ...schemas.pos import ErrorResponse, PosModel
from ...services.pos import PosService
from ..dependencies import get_pos_service

router = APIRouter(prefix="/pos", tags=["pos"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse}}


@router.get("", response_model=List[PosModel], status_code=status.HTTP_200_OK)
def list_pos(service: PosService = Depends(get_pos_service)) -> List[PosModel]:
    return [PosModel.from_domain(pos) for pos in service.get_all()]


@router.get("/{pos_id}", response_model=PosModel, responses=_NOT_FOUND)
def get_pos(
    pos_id: int = Path(..., ge=1),
    service: PosService = Depends(get_pos_service),
) -> PosModel:
    return PosModel.from_domain(service.get_by_id(pos_id))


@router.post("", response_model=PosModel, status_code=status.HTTP_201_CREATED, responses=_CONFLICT)
def create_pos(payload: PosModel, service: PosService = Depends(get_pos_service)) -> PosModel:
    if payload.id is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="POS ID must not be set when creating a new POS.",
        )
    return PosModel.from_domain(service.upsert(payload.to_domain()))


@router.put("/{pos_id}", response_model=PosModel, responses={**_NOT_FOUND, **_CONFLICT})
def update_pos(
    payload: PosModel,
    pos_id: int = Path(..., ge=1),
    service: PosService = Depends(get_pos_service),
) -> PosModel:
    if payload.id is not None and payload.id != pos_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"POS ID in path ({pos_id}) does not match ID in body ({payload.id}).",
        )
    pos = payload.to_domain()
    pos.id = pos_id
    return PosModel.from_domain(service.upsert(pos))


@router.post(
    "/import/osm/{node_id}",
    response_model=PosModel,
    status_code=status.HTTP_201_CREATED,
    responses={**_NOT_FOUND, **_CONFLICT, status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
def import_pos_from_osm(
    node_id: int = Path(..., ge=1, description="OpenStreetMap node ID"),
    service: PosService = Depends(get_pos_service),
) -> PosModel:
    return PosModel.from_domain(service.import_from_osm_node(node_id))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_pos(service: PosService = Depends(get_pos_service)) -> Response:
    service.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
