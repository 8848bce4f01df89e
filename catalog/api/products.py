"""Product endpoints: generic CRUD plus listing by category."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from catalog.domain.models.products import ProductCreate, ProductResponse, ProductUpdate
from catalog.domain.services.products import ProductService

from .handlers import CrudHandler, register_crud_routes


class ProductHandler(CrudHandler[ProductCreate, ProductUpdate, ProductResponse]):
    service: ProductService

    def __init__(self, service: ProductService, **kwargs) -> None:
        super().__init__(service, ProductCreate, ProductUpdate, **kwargs)

    async def list_by_category(self, raw_category_id: str, request: Request) -> JSONResponse:
        try:
            category_id = self.parse_id(raw_category_id)
            page, page_size = self.pagination_params(request)
            result = await self.service.list_by_category(category_id, page, page_size)
        except Exception as exc:
            return self.handle_error(exc)
        return self.respond(result)


def build_router(get_handler) -> APIRouter:
    router = APIRouter(prefix="/products", tags=["products"])

    @router.get("/category/{categoria_id}")
    async def list_products_by_category(
        categoria_id: str, request: Request, handler: ProductHandler = Depends(get_handler)
    ) -> JSONResponse:
        return await handler.list_by_category(categoria_id, request)

    return register_crud_routes(router, get_handler)
