"""
FastAPI 主应用

任务运行服务的 FastAPI 应用入口。
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Configure logging FIRST before any other imports
from task_runner.infrastructure.config.settings import get_settings
from task_runner.infrastructure.logging import configure_logging, get_logger

_settings = get_settings()
configure_logging(
    log_level=_settings.log_level,
    log_format=_settings.log_format,
)

logger = get_logger(__name__)

# Import routes after logging is configured
from task_runner import __version__  # noqa: E402
from task_runner.interfaces.rest.api.v1 import health, tasks  # noqa: E402
from task_runner.shared.errors.domain import NotFoundError, ValidationError  # noqa: E402
from task_runner.shared.errors.infrastructure import InfrastructureError  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    应用生命周期管理

    处理应用启动和关闭时的逻辑。
    """
    logger.info("Starting Sandbox Task Runner", version=__version__)

    from task_runner.infrastructure.dependencies import (
        cleanup_dependencies,
        get_sandbox_platform,
        initialize_dependencies,
    )
    from task_runner.infrastructure.persistence.database import db_manager

    settings = get_settings()

    initialize_dependencies(app)
    logger.info("Dependencies initialized")

    if settings.use_sql_repositories:
        await db_manager.initialize()
        logger.info("Database initialized")

        # 根据环境决定是否自动创建表
        if settings.environment in ("development", "staging"):
            await db_manager.create_tables()
            logger.info("Database tables created")

    # Kubernetes 不可达时只记录警告，执行请求会在输出中得到诊断信息
    if await get_sandbox_platform().ping():
        logger.info("Kubernetes API reachable", namespace=settings.kubernetes_namespace)
    else:
        logger.warning(
            "Kubernetes API unreachable, executions will record platform errors",
            namespace=settings.kubernetes_namespace,
        )

    yield

    logger.info("Shutting down Sandbox Task Runner")
    await cleanup_dependencies(app)
    await db_manager.close()


def create_app() -> FastAPI:
    """
    创建 FastAPI 应用

    使用工厂模式创建应用，便于测试和配置。
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="在临时 Kubernetes Pod 中执行已注册的 shell 命令",
        version=__version__,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # 配置 CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)
    _register_middleware(app)
    _register_routes(app)

    return app


def _error_response(status_code: int, error: str, message: str, detail=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "detail": detail},
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError
    ) -> JSONResponse:
        """400 异常处理"""
        logger.warning(
            "Request rejected",
            path=request.url.path,
            method=request.method,
            error=exc.message,
        )
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Bad Request",
            exc.message,
            exc.details or None,
        )

    @app.exception_handler(NotFoundError)
    async def not_found_exception_handler(
        request: Request,
        exc: NotFoundError
    ) -> JSONResponse:
        """404 异常处理"""
        logger.warning(
            "Resource not found",
            path=request.url.path,
            method=request.method,
            error=exc.message,
        )
        return _error_response(status.HTTP_404_NOT_FOUND, "Not Found", exc.message)

    @app.exception_handler(InfrastructureError)
    async def infrastructure_exception_handler(
        request: Request,
        exc: InfrastructureError
    ) -> JSONResponse:
        """503 异常处理（数据库等依赖不可用）"""
        logger.error(
            "Infrastructure error",
            path=request.url.path,
            method=request.method,
            error=exc.message,
            original_error=repr(exc.original_error) if exc.original_error else None,
        )
        return _error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Service Unavailable",
            exc.message,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """全局异常处理"""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "An unexpected error occurred",
            str(exc) if app.debug else None,
        )


def _register_routes(app: FastAPI) -> None:
    """注册路由"""
    app.include_router(health.router, prefix="/api/v1")
    app.include_router(tasks.router, prefix="/api/v1")

    @app.get("/", tags=["root"])
    async def root() -> dict:
        """根端点"""
        return {
            "name": get_settings().app_name,
            "version": __version__,
            "status": "operational",
            "documentation": {
                "swagger": "/docs",
                "redoc": "/redoc",
                "openapi": "/openapi.json",
            },
        }


def _register_middleware(app: FastAPI) -> None:
    """注册中间件"""
    from task_runner.interfaces.rest.middleware import RequestLoggingMiddleware

    app.add_middleware(RequestLoggingMiddleware)


# 创建应用实例
app = create_app()


def run() -> None:
    """命令行入口（task-runner）"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "task_runner.interfaces.rest.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
