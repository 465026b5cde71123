"""FalkorDB integration service main application module."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from falkordb_integration.config import env
from falkordb_integration.config.validation import EnvValidator
from falkordb_integration.database import init_db
from falkordb_integration.exceptions import IntegrationError
from falkordb_integration.logger import api_logger as logger
from falkordb_integration.models.api import ErrorResponse
from falkordb_integration.routers import router as v1_router
from falkordb_integration.routers.status import get_app_version


@asynccontextmanager
async def lifespan(app: FastAPI):
  """Validate configuration on startup."""
  logger.info("Starting FalkorDB integration API...")

  try:
    EnvValidator.validate_required_vars(env)
    logger.info(
      f"Configuration validated successfully: {EnvValidator.get_config_summary(env)}"
    )
  except Exception as e:
    logger.error(f"Configuration validation failed: {e}")
    if env.is_production():
      raise

  if not env.is_production():
    # Production schemas are managed by alembic
    init_db()

  yield


def create_app() -> FastAPI:
  """
  Create the FastAPI app and include the routers.

  Returns:
      FastAPI: The configured FastAPI application.
  """
  app = FastAPI(
    title="FalkorDB Integration API",
    version=get_app_version(),
    description="Bind FalkorDB Cloud instances to site environment variables.",
    lifespan=lifespan,
  )

  app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if env.is_development() else [],
    allow_methods=["*"],
    allow_headers=["*"],
  )

  @app.exception_handler(IntegrationError)
  async def integration_error_handler(
    request: Request, exc: IntegrationError
  ) -> JSONResponse:
    """Render typed failures with their status code and error code."""
    if exc.status_code >= 500:
      logger.error(
        f"{exc.error_code}: {exc.message}",
        exc_info=exc.cause or exc,
        extra={"metadata": exc.details},
      )
    else:
      logger.info(f"{exc.error_code}: {exc.message}")

    body = ErrorResponse(
      detail=exc.message,
      code=exc.error_code,
      details=exc.details or None,
      timestamp=exc.timestamp,
    )
    return JSONResponse(
      status_code=exc.status_code,
      content=body.model_dump(mode="json"),
    )

  @app.exception_handler(Exception)
  async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Generic 500 for anything unexpected; details stay in the server log."""
    logger.error("Unhandled exception", exc_info=exc)
    return JSONResponse(
      status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
      content={"detail": "Internal server error"},
    )

  app.include_router(v1_router)

  return app


app = create_app()
