#Fastapi/Asyncio
from fastapi import FastAPI
from contextlib import asynccontextmanager

#Project files
from admin_api.common.config import Config
import admin_api.infrastructure.telemetry.logs as logs
from admin_api.infrastructure.telemetry import setup_opentelemetry
from admin_api.infrastructure.dependencies import DatabaseManager
from admin_api.presentation.exception_handlers import register_exception_handlers
import admin_api.presentation.routers as routers

#Logging
import logging




###################
#       App       #
###################

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f'[APP: Startup] Startup began...')

    #Database
    await DatabaseManager.wait_for_startup(attempts=Config.DB_WAIT_MAX_RETRIES, interval_sec=Config.DB_WAIT_INTERVAL_SECONDS)
    if Config.DB_CREATE_SCHEMA:
        await DatabaseManager.initialize_data_structures()

    logger.info(f'[APP: Startup] Startup finished!')
    yield
    await DatabaseManager.close()
    logger.info(f'[APP: Shutdown] Database connections closed')



logs.init_loggers()
logger = logging.getLogger(Config.APP_NAME)

app = FastAPI(
    title = f'{Config.APP_NAME} commit {Config.GIT_COMMIT}',
    swagger_ui_parameters={
        "defaultModelsExpandDepth": -1,
        "docExpansion": None,
        "displayRequestDuration":True
    },
    lifespan=lifespan,
    root_path=f"/{Config.APP_NAME}"
)

app.include_router(routers.UserRouter)
register_exception_handlers(app)

if Config.OTEL_ENABLED:
    setup_opentelemetry(app, DatabaseManager.engine)



########################
#        Health        #
########################

@app.get("/health", include_in_schema=False)
async def health():
    """Indicates if the server is alive"""
    return {"alerts": [], "response": {"status": "ok", "commit": Config.GIT_COMMIT}}
