from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clock_server.core.config import settings
from clock_server.core.logging_config import configure_logging, install_request_logging, set_request_logs_enabled
from clock_server.api.routes import api_router

# Configure logging before app initialization
configure_logging(settings)

app = FastAPI(title=settings.PROJECT_NAME)

set_request_logs_enabled(settings.REQUEST_LOGS_ENABLED)

install_request_logging(app)

# Read-only public API: any origin, no credentials
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(api_router)
