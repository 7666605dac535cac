"""FastAPI endpoints for the Stowage domain."""

import json
from datetime import datetime

from fastapi import APIRouter, Query, Response

from stowage.action_log.entry import DEFAULT_QUERY_LIMIT, query_actions
from stowage.api.schemas import (
    AddContainerRequest,
    AddWasteContainerRequest,
    ConfirmReturnResponse,
    ContainerIdResponse,
    MarkAsWasteRequest,
    MarkAsWasteResponse,
    MoveSchema,
    PlaceItemRequest,
    PlaceItemResponse,
    RearrangeItemsRequest,
    RearrangeItemsResponse,
    UndockPlanRequest,
    UndockPlanResponse,
    UpdateItemRequest,
)
from stowage.container.management import AddContainer
from stowage.container.rearrangement import ApplyRearrangement
from stowage.item.placement import PlaceItem
from stowage.item.retrieval import RetrieveItem
from stowage.item.search import EXPIRY_WARNING_DAYS, find_items, item_detail
from stowage.item.update import UpdateItem
from stowage.reports.efficiency import efficiency_metrics
from stowage.reports.expiring import expiring_items
from stowage.reports.storage_status import storage_status
from stowage.utils.locking import process_command, state_lock
from stowage.waste.disposal import MarkAsWaste
from stowage.waste.management import AddWasteContainer
from stowage.waste.returns import ConfirmReturn, ScheduleUndock, plan_return

item_router = APIRouter(prefix="/api", tags=["items"])
container_router = APIRouter(prefix="/api", tags=["containers"])
waste_router = APIRouter(prefix="/api", tags=["waste"])
report_router = APIRouter(prefix="/api", tags=["reports"])


# --- Item endpoints ---


@item_router.post("/place_item", status_code=201, response_model=PlaceItemResponse, response_model_exclude_none=True)
async def place_item(body: PlaceItemRequest, response: Response) -> PlaceItemResponse:
    command = PlaceItem(
        item_id=body.item_id,
        name=body.name,
        category=body.category,
        volume=body.volume,
        weight=body.weight,
        priority=body.priority,
        expiration_date=body.expiration_date,
        container_id=body.container_id,
    )
    outcome = process_command(command)
    if outcome.placed:
        return PlaceItemResponse(
            message=f"Item {outcome.item_id} placed in container {outcome.container_id}",
            item_id=outcome.item_id,
            container_id=outcome.container_id,
        )

    response.status_code = 200
    return PlaceItemResponse(
        status="rearrangement_needed",
        message="No container has room for the item; apply the rearrangement plan first",
        item_id=outcome.item_id,
        rearrangement_plan=[MoveSchema(**move.to_dict()) for move in outcome.rearrangement_plan],
    )


@item_router.get("/find_item")
async def find_item(query: str | None = None, category: str | None = None) -> dict:
    results = find_items(query=query, category=category)
    return {"status": "success", "count": len(results), "items": results}


@item_router.post("/retrieve_item/{item_id}")
async def retrieve_item(item_id: str) -> dict:
    item = process_command(RetrieveItem(item_id=item_id))
    return {
        "status": "success",
        "message": f"Item {item.id} retrieved",
        "item": item.to_summary(),
    }


@item_router.get("/item/{item_id}")
async def get_item(item_id: str) -> dict:
    return {"status": "success", "item": item_detail(item_id)}


@item_router.put("/update_item/{item_id}")
async def update_item(item_id: str, body: UpdateItemRequest) -> dict:
    command = UpdateItem(
        item_id=item_id,
        name=body.name,
        category=body.category,
        priority=body.priority,
        expiration_date=body.expiration_date,
        location=body.location,
    )
    item = process_command(command)
    return {
        "status": "success",
        "message": f"Item {item.id} updated",
        "item": item.to_summary(),
    }


# --- Container endpoints ---


@container_router.post("/add_container", status_code=201, response_model=ContainerIdResponse)
async def add_container(body: AddContainerRequest) -> ContainerIdResponse:
    command = AddContainer(
        container_id=body.container_id,
        name=body.name,
        total_volume=body.total_volume,
        max_weight=body.max_weight,
        container_type=body.type,
        accessibility_factor=body.accessibility_factor,
    )
    container = process_command(command)
    return ContainerIdResponse(message=f"Container {container.id} added", container_id=str(container.id))


@container_router.post("/rearrange_items", response_model=RearrangeItemsResponse)
async def rearrange_items(body: RearrangeItemsRequest) -> RearrangeItemsResponse:
    moves = [move.model_dump(include={"item_id", "from_container", "to_container"}) for move in body.rearrangement_plan]
    applied = process_command(ApplyRearrangement(moves=json.dumps(moves)))
    return RearrangeItemsResponse(
        message="Rearrangement completed successfully",
        moves_completed=len(applied),
        moves=applied,
    )


# --- Waste endpoints ---


@waste_router.post("/add_waste_container", status_code=201, response_model=ContainerIdResponse)
async def add_waste_container(body: AddWasteContainerRequest) -> ContainerIdResponse:
    command = AddWasteContainer(
        container_id=body.container_id,
        name=body.name,
        total_volume=body.total_volume,
        max_weight=body.max_weight,
        waste_categories=json.dumps(body.waste_categories),
        undock_date=body.undock_date,
    )
    container = process_command(command)
    return ContainerIdResponse(message=f"Waste container {container.id} added", container_id=str(container.id))


@waste_router.post("/mark_as_waste", response_model=MarkAsWasteResponse)
async def mark_as_waste(body: MarkAsWasteRequest) -> MarkAsWasteResponse:
    waste_container = process_command(MarkAsWaste(item_id=body.item_id, reason=body.reason))
    return MarkAsWasteResponse(
        message=f"Item {body.item_id} marked as waste",
        waste_container=str(waste_container.id),
    )


@waste_router.get("/return_planning/{waste_container_id}")
async def return_planning(waste_container_id: str) -> dict:
    return {"status": "success", "return_plan": plan_return(waste_container_id)}


@waste_router.post("/confirm_return/{waste_container_id}", response_model=ConfirmReturnResponse)
async def confirm_return(waste_container_id: str) -> ConfirmReturnResponse:
    items_removed = process_command(ConfirmReturn(waste_container_id=waste_container_id))
    return ConfirmReturnResponse(
        message=f"Waste container {waste_container_id} confirmed returned",
        items_removed=items_removed,
    )


@waste_router.post("/undock_plan", status_code=201, response_model=UndockPlanResponse)
async def undock_plan(body: UndockPlanRequest) -> UndockPlanResponse:
    plan = process_command(ScheduleUndock(module_id=body.module_id, undock_date=body.undock_date, plan_type=body.type))
    return UndockPlanResponse(
        message=f"Undock plan created for waste container {plan.module_id}",
        module_id=plan.module_id,
        undock_date=plan.undock_date,
        type=plan.plan_type,
        items_count=plan.items_count,
    )


# --- Report endpoints ---


@report_router.get("/get_storage_status")
async def get_storage_status() -> dict:
    return {"status": "success", **storage_status()}


@report_router.get("/efficiency_metrics")
async def get_efficiency_metrics() -> dict:
    return {"status": "success", "efficiency_metrics": efficiency_metrics()}


@report_router.get("/expiring_items")
async def get_expiring_items(days: int = Query(EXPIRY_WARNING_DAYS, ge=0)) -> dict:
    items = expiring_items(days)
    return {"status": "success", "expiring_items": items, "count": len(items)}


@report_router.get("/logs")
async def get_logs(
    action_type: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: int = Query(DEFAULT_QUERY_LIMIT, ge=0),
) -> dict:
    with state_lock.read():
        entries, total = query_actions(action=action_type, start=start_date, end=end_date, limit=limit)
    return {"status": "success", "total_logs": total, "logs": [entry.to_dict() for entry in entries]}
