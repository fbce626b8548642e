# eventpro/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from eventpro.config import CORS_ORIGINS, HOST, PORT
from eventpro.database import Database
from eventpro.exceptions import register_exception_handlers
from eventpro.logging_config import setup_logging
from eventpro.routes import auth, events, inscriptions, users


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database()
    await database.connect()
    app.state.database = database
    try:
        yield
    finally:
        await database.close()


def create_app(lifespan=lifespan) -> FastAPI:
    app = FastAPI(title="EventPro API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(users.router, prefix="/api/user", tags=["Users"])
    app.include_router(events.router, prefix="/api/event", tags=["Events"])
    app.include_router(inscriptions.router, prefix="/api/inscription", tags=["Inscriptions"])

    @app.get("/")
    async def root():
        return {"message": "EventPro API is running. See the docs at /docs"}

    return app


setup_logging()
app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
