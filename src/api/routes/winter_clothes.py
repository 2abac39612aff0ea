"""
Winter clothing API routes
"""

from api.dependencies import get_cloths_service
from api.routes.resource_routes import create_collection_router
from models.resources import ClothPayload

router = create_collection_router(
    create_path="/create-winter-clothes",
    collection_path="/winter-clothes",
    payload_model=ClothPayload,
    get_service=get_cloths_service,
    label="Cloth",
    plural="cloths",
)
