"""
Shared API dependencies

Services are built per request around the database handle opened by the
application lifespan.
"""

from fastapi import Depends

from config.settings import CLOTHS_COLLECTION, TESTIMONIALS_COLLECTION, COMMENTS_COLLECTION
from database.connection import MongoDatabase, get_database
from services.collection_service import CollectionService
from services.users_service import UsersService


def get_users_service(db: MongoDatabase = Depends(get_database)) -> UsersService:
    return UsersService(db)


def get_cloths_service(db: MongoDatabase = Depends(get_database)) -> CollectionService:
    return CollectionService(db, CLOTHS_COLLECTION, "Cloth")


def get_testimonials_service(db: MongoDatabase = Depends(get_database)) -> CollectionService:
    return CollectionService(db, TESTIMONIALS_COLLECTION, "Testimonial")


def get_comments_service(db: MongoDatabase = Depends(get_database)) -> CollectionService:
    return CollectionService(db, COMMENTS_COLLECTION, "Comment")
