from fastapi import FastAPI

from bookcircle.errors import register_error_handlers
from bookcircle.routers import auth, reading_status, reviews, users


def create_app() -> FastAPI:
    app = FastAPI(title="Bookcircle", version="0.1.0")
    register_error_handlers(app)
    app.include_router(auth.router)
    app.include_router(reviews.router)
    app.include_router(reading_status.router)
    app.include_router(users.router)
    return app


app = create_app()
