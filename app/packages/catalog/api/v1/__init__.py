"""API 汇总路由：统一挂载所有子路由。"""

from fastapi import APIRouter

from app.packages.catalog.api.v1.endpoints import files, items, links, status, tags, views

api_router = APIRouter()
api_router.include_router(status.router)
api_router.include_router(files.router)
api_router.include_router(items.router)
api_router.include_router(tags.router)
api_router.include_router(tags.group_router)
api_router.include_router(tags.topic_router)
api_router.include_router(links.item_tags_router)
api_router.include_router(links.tag_group_tags_router)
api_router.include_router(links.topic_tag_groups_router)
api_router.include_router(links.topic_items_router)
api_router.include_router(views.router)
