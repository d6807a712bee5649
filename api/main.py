import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from answers import router as answers_router
from core import db, errors, log, settings
from questions import router as questions_router
from votes import router as votes_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    log.setup_logging()
    # Initialize the DB pool once per process.
    await db.init_pool()
    if settings.bootstrap_schema():
        await db.bootstrap_schema()
    logger.info("startup_complete")
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(
    title="Q&A Board API",
    description="Questions, answers and votes over PostgreSQL.",
    lifespan=lifespan,
)

# Allow the frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.register_error_handlers(app)
log.register_request_logging(app)

app.include_router(questions_router.router, tags=["questions"])
app.include_router(answers_router.router, tags=["answers"])
app.include_router(votes_router.router, tags=["votes"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "qa-board api"}
