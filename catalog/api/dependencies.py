"""FastAPI dependency chain: session -> repositories -> service -> handler.

Every request gets its own AsyncSession (FastAPI caches get_session within
a request, so the handler commits the same session the repositories use).
Repositories, services and handlers are cheap per-request objects and share
no mutable state.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.domain.services.base import ServiceConfig
from catalog.domain.services.categories import CategoryService
from catalog.domain.services.products import ProductService
from catalog.infrastructure.database import Settings, get_session
from catalog.infrastructure.persistence.mappers import CategoryMapper, ProductMapper
from catalog.infrastructure.persistence.repositories import Repositories, get_repositories

from .categories import CategoryHandler
from .products import ProductHandler


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def service_config(entity_name: str, settings: Settings) -> ServiceConfig:
    return ServiceConfig(
        entity_name=entity_name,
        max_page_size=settings.max_page_size,
        default_page_size=settings.default_page_size,
    )


def get_repos(session: AsyncSession = Depends(get_session)) -> Repositories:
    return get_repositories(session)


def get_category_service(
    repos: Repositories = Depends(get_repos),
    settings: Settings = Depends(get_settings),
) -> CategoryService:
    return CategoryService(
        repos.categories, CategoryMapper(), service_config("Category", settings)
    )


def get_product_service(
    repos: Repositories = Depends(get_repos),
    settings: Settings = Depends(get_settings),
) -> ProductService:
    return ProductService(
        repos.products,
        repos.categories,
        ProductMapper(),
        service_config("Product", settings),
    )


def get_category_handler(
    service: CategoryService = Depends(get_category_service),
    session: AsyncSession = Depends(get_session),
) -> CategoryHandler:
    return CategoryHandler(service, commit=session.commit)


def get_product_handler(
    service: ProductService = Depends(get_product_service),
    session: AsyncSession = Depends(get_session),
) -> ProductHandler:
    return ProductHandler(service, commit=session.commit)
