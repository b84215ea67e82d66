from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from config import APP_NAME, APP_VERSION
from database import Base, engine
import models  # noqa: F401  registers every table on Base.metadata

from routes import (
    users,
    trips,
    date_pitches,
    destination_pitches,
    travel_confirmations,
    activities,
)
from services.errors import TripPlannerError
from utils.logger import setup_api_logger

# Schema migrations are out of scope; create missing tables on startup
Base.metadata.create_all(bind=engine)

app = FastAPI(title=APP_NAME, version=APP_VERSION)

api_logger = setup_api_logger()


async def _request_body(request: Request) -> str:
    try:
        body = await request.body()
    except Exception:
        body = b""
    return body.decode('utf-8', errors='replace')


@app.exception_handler(TripPlannerError)
async def domain_exception_handler(request: Request, exc: TripPlannerError):
    body = await _request_body(request)
    if exc.status_code >= 500:
        api_logger.error("%s on %s %s | body=%s | detail=%s",
                         exc.code, request.method, request.url.path, body, exc.detail)
    else:
        api_logger.warning("%s on %s %s | status=%s | body=%s | detail=%s",
                           exc.code, request.method, request.url.path, exc.status_code, body, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "code": exc.code})


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    body = await _request_body(request)
    api_logger.warning("HTTPException on %s %s | status=%s | body=%s | detail=%s",
                       request.method, request.url.path, exc.status_code, body, str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    body = await _request_body(request)
    api_logger.error("Unhandled exception on %s %s | body=%s | error=%s",
                     request.method, request.url.path, body, str(exc), exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error", "code": "Internal"})


app.include_router(users.router)
app.include_router(trips.router)
app.include_router(date_pitches.router)
app.include_router(date_pitches.router2)
app.include_router(destination_pitches.router)
app.include_router(destination_pitches.router2)
app.include_router(travel_confirmations.router)
app.include_router(activities.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
