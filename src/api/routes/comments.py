"""
Comment API routes
"""

from api.dependencies import get_comments_service
from api.routes.resource_routes import create_collection_router
from models.resources import CommentPayload

router = create_collection_router(
    create_path="/create-comment",
    collection_path="/comments",
    payload_model=CommentPayload,
    get_service=get_comments_service,
    label="Comment",
    plural="comments",
)
