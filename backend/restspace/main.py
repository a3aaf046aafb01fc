#!/usr/bin/env python3
"""
Restspace - Main FastAPI Application

主应用入口文件
"""

import argparse
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restspace.config import LogConfig, ServerConfig, WorkspaceConfig
from restspace.config.logging_config import LoggingConfig
from restspace.utils.exceptions import register_exception_handlers
from restspace.api import rest_router, workspace_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI应用生命周期管理
    """
    logger.info("=" * 80)
    logger.info("Starting Restspace...")
    WorkspaceConfig.ensure_exists()
    logger.info(f"Workspace base path: {WorkspaceConfig.BASE_PATH.resolve()}")
    logger.info(f"Documentation: http://{ServerConfig.HOST}:{ServerConfig.PORT}/docs")
    logger.info("=" * 80)

    yield

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    创建并配置FastAPI应用

    Returns:
        配置好的FastAPI应用实例
    """
    app = FastAPI(
        title="Restspace",
        version="0.1.0",
        description="Filesystem-backed REST request workspace",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ServerConfig.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(workspace_router, prefix="/api")
    app.include_router(rest_router, prefix="/api")

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


def run_api(host: str, port: int, reload: bool = False):
    """
    使用给定配置运行API服务器
    """
    try:
        uvicorn.run("restspace.main:app", host=host, port=port, reload=reload)
    except Exception as e:
        logger.error(f"Failed to start API server: {e}")
        raise


def main() -> None:
    """
    Restspace主入口
    """
    parser = argparse.ArgumentParser(prog='restspace', description='Restspace Server')
    parser.add_argument("--host", type=str, default=ServerConfig.HOST)
    parser.add_argument("--port", type=int, default=ServerConfig.PORT)
    parser.add_argument("--reload", action="store_true", default=ServerConfig.RELOAD)
    args = parser.parse_args()

    LoggingConfig(
        log_file_name=LogConfig.FILE_NAME,
        log_level=LogConfig.get_level(),
        backup_count=LogConfig.BACKUP_COUNT,
        log_dir=LogConfig.DIR,
    ).setup_logging()

    try:
        logger.info(f"  - Server URL: http://{args.host}:{args.port}")
        run_api(host=args.host, port=args.port, reload=args.reload)
    except KeyboardInterrupt:
        logger.info("Shutting down Restspace gracefully...")
    except Exception as e:
        logger.error(f"Application startup failed: {e}")
        sys.exit(1)


app = create_app()

if __name__ == "__main__":
    main()
