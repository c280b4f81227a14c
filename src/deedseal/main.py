from contextlib import asynccontextmanager
from fastapi import FastAPI

# To run this with uvicorn:
# uvicorn deedseal.main:app --reload
from deedseal.routers import properties as properties_router
from deedseal.routers import system as system_router
from deedseal.lib.log import get_logger, log

logger = get_logger("server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    log(logger, "info", "Starting up DeedSeal server...")
    yield
    log(logger, "info", "Shutting down DeedSeal server...")


def create_app() -> FastAPI:
    app = FastAPI(
        title="DeedSeal Server",
        description="Deed record sealing and property identifier allocation",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(system_router.router, tags=["system"])
    app.include_router(properties_router.router, tags=["properties"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
