"""
Route factory for the free-form resource collections

Clothing items, testimonials and comments expose the same five operations;
each resource module builds its router here with its own paths and labels.
"""

import logging
from typing import Callable, Optional, Type

from fastapi import APIRouter, Body, HTTPException, Depends
from fastapi.responses import JSONResponse

from models.resources import ResourcePayload
from services.collection_service import CollectionService
from utils.error_handling import raise_for_service_error
from utils.helpers import envelope

logger = logging.getLogger(__name__)


def create_collection_router(
    *,
    create_path: str,
    collection_path: str,
    payload_model: Type[ResourcePayload],
    get_service: Callable[..., CollectionService],
    label: str,
    plural: str,
) -> APIRouter:
    """
    Build the CRUD router for one collection

    Args:
        create_path: Path of the insert route, e.g. "/create-winter-clothes"
        collection_path: Path of the list route; item routes append "/{item_id}"
        payload_model: Body model for create and replace; a missing body means no fields
        get_service: Dependency returning the collection's service
        label: Singular name used in messages, e.g. "Cloth"
        plural: Plural name used in messages, e.g. "cloths"
    """
    router = APIRouter()
    noun = label.lower()
    item_path = f"{collection_path}/{{item_id}}"

    @router.post(create_path, status_code=201, summary=f"Create {noun}")
    async def create_item(
        payload: Optional[payload_model] = Body(None),
        service: CollectionService = Depends(get_service)
    ):
        try:
            result = await service.create(payload.to_document() if payload is not None else {})
            raise_for_service_error(result, f"Error adding {noun}")

            return envelope(message=f"{label} added successfully", data=result.data[0])

        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to add {noun}: {e}")
            raise HTTPException(status_code=500, detail=f"Error adding {noun}")

    @router.get(collection_path, summary=f"List {plural}")
    async def list_items(service: CollectionService = Depends(get_service)):
        try:
            result = await service.list_all()
            raise_for_service_error(result, f"Error fetching {plural}")

            return envelope(data=result.data)

        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch {plural}: {e}")
            raise HTTPException(status_code=500, detail=f"Error fetching {plural}")

    @router.get(item_path, summary=f"Get {noun}")
    async def get_item(
        item_id: str,
        service: CollectionService = Depends(get_service)
    ):
        try:
            result = await service.get_by_id(item_id)
            raise_for_service_error(result, f"Error fetching {noun}")

            return envelope(data=result.data[0])

        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to fetch {noun} {item_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Error fetching {noun}")

    @router.put(item_path, summary=f"Replace {noun}")
    async def replace_item(
        item_id: str,
        payload: Optional[payload_model] = Body(None),
        service: CollectionService = Depends(get_service)
    ):
        try:
            result = await service.replace_by_id(item_id, payload.to_document() if payload is not None else {})
            raise_for_service_error(result, f"Error updating {noun}")

            return envelope(message=f"{label} updated successfully")

        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to update {noun} {item_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Error updating {noun}")

    @router.delete(item_path, summary=f"Delete {noun}")
    async def delete_item(
        item_id: str,
        service: CollectionService = Depends(get_service)
    ):
        try:
            result = await service.delete_by_id(item_id)
            raise_for_service_error(result, f"Error deleting {noun}")

        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to delete {noun} {item_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Error deleting {noun}")

        data = {"deletedCount": result.count}
        if result.count == 0:
            return JSONResponse(
                status_code=404,
                content=envelope(message=f"{label} not found", data=data, success=False)
            )
        return envelope(message=f"{label} deleted successfully", data=data)

    return router
