from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import config, log
from core.db import Database
from employees import router as employees_router

log.init_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process, handed to repositories through app.state.
    app.state.database = await Database.connect()
    try:
        yield
    finally:
        await app.state.database.close()
        app.state.database = None


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(employees_router.router, prefix="/api/v1", tags=["employees"])


@app.exception_handler(RequestValidationError)
async def request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Same shape as create-time rule failures: one message, status 400.
    errors = exc.errors()
    if not errors:
        return JSONResponse(status_code=400, content={"errors": "Invalid request"})

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg") or "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"errors": f"{location}: {message}" if location else message},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


def run() -> None:
    uvicorn.run(app, host=config.server_host(), port=config.server_port())


if __name__ == "__main__":
    run()
