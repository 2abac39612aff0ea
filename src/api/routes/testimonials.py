"""
Testimonial API routes
"""

from api.dependencies import get_testimonials_service
from api.routes.resource_routes import create_collection_router
from models.resources import TestimonialPayload

router = create_collection_router(
    create_path="/create-testimonial",
    collection_path="/testimonials",
    payload_model=TestimonialPayload,
    get_service=get_testimonials_service,
    label="Testimonial",
    plural="testimonials",
)
