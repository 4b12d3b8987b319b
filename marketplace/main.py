"""
ASGI entry point: `uvicorn marketplace.main:app`.

STORAGE_BACKEND=prisma (default) stores everything in PostgreSQL;
STORAGE_BACKEND=memory keeps it in the process, for local runs without a database.
"""

from marketplace.config.settings import get_config
from marketplace.fastapi_app import create_fastapi_app
from marketplace.setup.ioc import InMemoryProvider, create_container


def _build_container():
    if get_config().STORAGE_BACKEND == "memory":
        return create_container(InMemoryProvider())

    from marketplace.setup.ioc.prisma_provider import PrismaProvider

    return create_container(PrismaProvider())


app = create_fastapi_app(_build_container())
