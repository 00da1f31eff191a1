import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from habitlocal.database import init_db
from habitlocal.routes.ai_routes import router as ai_router
from habitlocal.routes.habit_routes import router as habit_router
from habitlocal.routes.settings_routes import router as settings_router
from habitlocal.routes.stats_routes import router as stats_router

logger = logging.getLogger(__name__)


def create_app(initialize_storage: bool = True) -> FastAPI:
    if initialize_storage:
        try:
            init_db()
        except Exception as e:
            logger.error(f"Storage init failed: {e}")

    app = FastAPI(title="HabitLocal")

    @app.get("/api/v1/health-check")
    async def health():
        return {"status": "ok", "message": "Backend is alive!"}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(habit_router)
    app.include_router(stats_router)
    app.include_router(settings_router)
    app.include_router(ai_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("habitlocal.main:app", host="0.0.0.0", port=8000, reload=True)
