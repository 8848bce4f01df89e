"""Category endpoints: generic CRUD plus /active and /{id}/products."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from catalog.domain.models.categories import CategoryCreate, CategoryResponse, CategoryUpdate
from catalog.domain.services.categories import CategoryService

from .handlers import CrudHandler, register_crud_routes


class CategoryHandler(CrudHandler[CategoryCreate, CategoryUpdate, CategoryResponse]):
    service: CategoryService

    def __init__(self, service: CategoryService, **kwargs) -> None:
        super().__init__(service, CategoryCreate, CategoryUpdate, **kwargs)

    async def get_with_products(self, raw_id: str) -> JSONResponse:
        try:
            result = await self.service.get_with_products(self.parse_id(raw_id))
        except Exception as exc:
            return self.handle_error(exc)
        return self.respond(result)

    async def list_active(self) -> JSONResponse:
        try:
            result = await self.service.list_active()
        except Exception as exc:
            return self.handle_error(exc)
        return self.respond(result)


def build_router(get_handler) -> APIRouter:
    router = APIRouter(prefix="/categories", tags=["categories"])

    @router.get("/active")
    async def list_active_categories(
        handler: CategoryHandler = Depends(get_handler),
    ) -> JSONResponse:
        return await handler.list_active()

    @router.get("/{id}/products")
    async def get_category_with_products(
        id: str, handler: CategoryHandler = Depends(get_handler)
    ) -> JSONResponse:
        return await handler.get_with_products(id)

    return register_crud_routes(router, get_handler)
