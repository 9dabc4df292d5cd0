from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from mentor_buddy.api.chat import router as chat_router
from mentor_buddy.api.conversations import router as conversations_router
from mentor_buddy.core.ai_engine import ChatModel, GeminiChatModel
from mentor_buddy.core.config import APP_NAME, get_cors_origins
from mentor_buddy.core.errors import UpstreamError
from mentor_buddy.db.session import init_db
from mentor_buddy.storage import DatabaseStorage, Storage, create_storage


def create_app(storage: Storage | None = None, chat_model: ChatModel | None = None) -> FastAPI:
    """Build the API with its storage backend and LLM injected up front."""
    app = FastAPI(title=f"{APP_NAME} API")
    app.state.storage = storage or create_storage()
    app.state.chat_model = chat_model or GeminiChatModel()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # field level detail is not exposed
        logger.info("Rejected request to {}: {}", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"message": "Invalid request format"})

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.on_event("startup")
    def create_tables():
        if isinstance(app.state.storage, DatabaseStorage):
            init_db(app.state.storage.engine)
            logger.info("Database tables ready")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(conversations_router)
    app.include_router(chat_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
