from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uuid
import time
from ledger_import.api.endpoints import accounts, imports, transactions
from ledger_import.api.state import DEFAULT_SESSION_ID
from ledger_import.common.config import get_settings
from ledger_import.common.logging_config import setup_logging, set_request_id, get_logger

settings = get_settings()

# Initialize Structured Logging
setup_logging(settings.log_level, settings.log_file)
logger = get_logger("api.main")

app = FastAPI(title="Ledger Import API", version="1.0.0")


# Middleware for Request ID, Session ID and Logging
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    request.state.session_id = request.headers.get("X-Session-ID") or DEFAULT_SESSION_ID

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path}",
        extra_fields={
            "method": request.method,
            "path": request.url.path,
            "client": request.client.host if request.client else "unknown"
        }
    )

    try:
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.info(
            f"Request completed: {request.method} {request.url.path} - Status: {response.status_code}",
            extra_fields={
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2)
            }
        )

        response.headers["X-Request-ID"] = request_id
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"Request failed: {str(e)}",
            extra_fields={
                "error": str(e),
                "process_time_ms": round(process_time * 1000, 2)
            },
            exc_info=True
        )
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(imports.router, prefix="/api/imports", tags=["Imports"])
app.include_router(accounts.router, prefix="/api/accounts", tags=["Accounts"])
app.include_router(transactions.router, prefix="/api/transactions", tags=["Transactions"])


@app.get("/api/health")
def health_check():
    return {"status": "ok", "app": "Ledger Import"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8010)
