# main.py
from fastapi_limiter import FastAPILimiter
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, get_redis
from fastapi.responses import JSONResponse
from mcp_server import mcp
from model.api import HealthResponse
from util.constants import InternalURIs
from util.logger import init_logger

# Built before the lifespan runs: the session manager only exists afterwards.
mcp_app = mcp.streamable_http_app()


async def _real_ip(request: Request) -> str:
    fwd = request.headers.get("x-forwarded-for")
    if fwd:
        return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    try:
        init_logger()
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        redis = await get_redis()
        if settings.RATE_LIMIT_TIMES > 0:
            await FastAPILimiter.init(redis, identifier=_real_ip)
        print(f"{Color.BLUE}Server Started{Color.RESET}")
    except Exception as e:
        print("Failed to connect to Redis:", e)
        raise

    try:
        async with mcp.session_manager.run():
            yield
    finally:
        try:
            await close_redis()
        except Exception as e:
            print("Error closing Redis:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Mcp-Session-Id"],
)


@app.get(InternalURIs.ROOT, response_model=HealthResponse)
@app.get(InternalURIs.HEALTH, response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        name=f"{settings.SERVER_NAME}-mcp",
        version=settings.SERVER_VERSION,
        transport="streamable-http",
        mcp_endpoint=InternalURIs.MCP,
        status="ok",
    )


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    return JSONResponse(
        status_code=429,
        content={
            "ok": False,
            "error": "rate_limited",
            "message": "Too many requests. Try again in 60s.",
        },
        headers={"Retry-After": "60"},
    )


routes.register_routes(app)

# Last: the MCP app serves InternalURIs.MCP and answers anything not routed above.
app.mount(InternalURIs.ROOT, mcp_app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=reload)
