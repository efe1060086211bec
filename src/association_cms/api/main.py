from fastapi import APIRouter

from association_cms.api.routes import content, i18n

api_router = APIRouter()
api_router.include_router(content.router)
api_router.include_router(i18n.router)
