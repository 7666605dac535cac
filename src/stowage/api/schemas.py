"""Pydantic request/response schemas for the Stowage API."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

# --- Request Schemas ---


class PlaceItemRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "item_id": "item_003",
                    "name": "Water Pouch",
                    "category": "food",
                    "volume": 1.0,
                    "weight": 1.0,
                    "priority": 4,
                    "expiration_date": "2026-12-31",
                }
            ]
        }
    }

    item_id: str = Field(..., max_length=255)
    name: str = Field(..., max_length=255)
    category: str | None = Field(None, max_length=100)
    volume: float
    weight: float
    priority: int | None = Field(None, ge=1, le=5)
    expiration_date: dt.date | None = None
    container_id: str | None = Field(None, max_length=255)


class MoveSchema(BaseModel):
    item_id: str
    item_name: str | None = None
    from_container: str
    to_container: str
    volume_freed: float | None = None
    weight_freed: float | None = None


class RearrangeItemsRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "rearrangement_plan": [
                        {"item_id": "item_001", "from_container": "storage_001", "to_container": "storage_002"}
                    ]
                }
            ]
        }
    }

    rearrangement_plan: list[MoveSchema]


class MarkAsWasteRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"item_id": "item_001", "reason": "expired"}]}}

    item_id: str
    reason: str = "used"


class UndockPlanRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"module_id": "waste_001", "undock_date": "2026-11-01", "type": "waste"}]}
    }

    module_id: str
    undock_date: dt.date | None = None
    type: str = "waste"


class UpdateItemRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"priority": 5, "location": "storage_002"}]}}

    name: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=100)
    priority: int | None = Field(None, ge=1, le=5)
    expiration_date: dt.date | None = None
    location: str | None = Field(None, max_length=255)


class AddContainerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "container_id": "storage_003",
                    "name": "Aft Locker",
                    "total_volume": 40.0,
                    "max_weight": 80.0,
                    "type": "storage",
                    "accessibility_factor": 0.6,
                }
            ]
        }
    }

    container_id: str = Field(..., max_length=255)
    name: str = Field(..., max_length=255)
    total_volume: float
    max_weight: float
    type: str = "storage"
    accessibility_factor: float = Field(0.5, ge=0.0, le=1.0)


class AddWasteContainerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "container_id": "waste_002",
                    "name": "Medical Waste",
                    "total_volume": 20.0,
                    "max_weight": 40.0,
                    "waste_categories": ["medical"],
                }
            ]
        }
    }

    container_id: str = Field(..., max_length=255)
    name: str = Field(..., max_length=255)
    total_volume: float
    max_weight: float
    waste_categories: list[str] = Field(default_factory=lambda: ["general"])
    undock_date: dt.date | None = None


# --- Response Schemas ---


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "success"}]}}

    status: str = "success"


class PlaceItemResponse(StatusResponse):
    item_id: str
    container_id: str | None = None
    message: str | None = None
    rearrangement_plan: list[MoveSchema] | None = None


class RearrangeItemsResponse(StatusResponse):
    message: str
    moves_completed: int
    moves: list[dict]


class MarkAsWasteResponse(StatusResponse):
    message: str
    waste_container: str


class ConfirmReturnResponse(StatusResponse):
    message: str
    items_removed: int


class UndockPlanResponse(StatusResponse):
    message: str
    module_id: str
    undock_date: dt.date
    type: str
    items_count: int


class ContainerIdResponse(StatusResponse):
    message: str
    container_id: str
