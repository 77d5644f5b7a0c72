"""
Content Routes - leaders, gallery images and videos for the marketing pages.

GET /leaders, /gallery, /videos - Visible items in display order
POST /leaders, /gallery, /videos - Add an item (admin only)
PATCH /{collection}/{item_id} - Update an item (admin only)
DELETE /{collection}/{item_id} - Delete an item (admin only)

Admins may pass include_hidden=true to see hidden items.
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional, Type
from pydantic import BaseModel

from member_network.core.auth import get_optional_user, require_admin
from member_network.repositories import Storage, get_storage
from member_network.schemas.schemas import (
    GalleryImageCreate, GalleryImageResponse, GalleryImageUpdate, LeaderCreate, LeaderResponse, LeaderUpdate,
    MessageResponse, Role, VideoCreate, VideoResponse, VideoUpdate,
)
from member_network.services.roles import has_role

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Content"])


def add_content_routes(path: str, kind: str, label: str, create_model: Type[BaseModel],
                       update_model: Type[BaseModel], response_model: Type[BaseModel]) -> None:
    """Register list/create/update/delete endpoints for one content collection."""

    async def list_items(
        include_hidden: bool = Query(False, description="Admins only"),
        user: Optional[dict] = Depends(get_optional_user),
        storage: Storage = Depends(get_storage),
    ):
        show_hidden = include_hidden and user is not None and has_role(user["roles"], Role.admin)
        return storage.list_content(kind, include_hidden=show_hidden)

    async def create_item(
        data: create_model,
        admin: dict = Depends(require_admin),
        storage: Storage = Depends(get_storage),
    ):
        item = storage.create_content(kind, data.model_dump())
        logger.info("%s %s added by %s", label, item["id"], admin["id"])
        return item

    async def update_item(
        item_id: str,
        data: update_model,
        admin: dict = Depends(require_admin),
        storage: Storage = Depends(get_storage),
    ):
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            raise HTTPException(status_code=400, detail="No fields to update")
        item = storage.update_content(kind, item_id, **fields)
        if not item:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return item

    async def delete_item(
        item_id: str,
        admin: dict = Depends(require_admin),
        storage: Storage = Depends(get_storage),
    ):
        if not storage.delete_content(kind, item_id):
            raise HTTPException(status_code=404, detail=f"{label} not found")
        logger.info("%s %s deleted by %s", label, item_id, admin["id"])
        return MessageResponse(message=f"{label} deleted")

    router.add_api_route(path, list_items, methods=["GET"], response_model=List[response_model],
                         summary=f"List {kind.replace('_', ' ')}", name=f"list_{kind}")
    router.add_api_route(path, create_item, methods=["POST"], response_model=response_model,
                         status_code=201, summary=f"Add {label.lower()}", name=f"create_{kind}")
    router.add_api_route(f"{path}/{{item_id}}", update_item, methods=["PATCH"], response_model=response_model,
                         summary=f"Update {label.lower()}", name=f"update_{kind}")
    router.add_api_route(f"{path}/{{item_id}}", delete_item, methods=["DELETE"], response_model=MessageResponse,
                         summary=f"Delete {label.lower()}", name=f"delete_{kind}")


add_content_routes("/leaders", "leaders", "Leader", LeaderCreate, LeaderUpdate, LeaderResponse)
add_content_routes("/gallery", "gallery_images", "Gallery image",
                   GalleryImageCreate, GalleryImageUpdate, GalleryImageResponse)
add_content_routes("/videos", "videos", "Video", VideoCreate, VideoUpdate, VideoResponse)
