"""FastAPI application entrypoint for docplan service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..models import BuildPlan
from ..orchestrator import Orchestrator
from ..serialization import overview_to_dict, stale_link_to_dict


class PlanRequest(BaseModel):
    path: str
    config: Optional[str] = None
    workspace: Optional[str] = None
    order: Optional[str] = None


class PlanResponse(BaseModel):
    caption: str
    components: int
    build_files: List[str]
    overview: Dict[str, Any]
    stale_links: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing docplan operations."""

    app = FastAPI(title="DocPlan Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/plan", response_model=PlanResponse)
    async def plan_workspace(
        payload: PlanRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> PlanResponse:
        def _run_plan() -> BuildPlan:
            return orchestrator.build_plan(
                payload.path,
                config_path=payload.config,
                workspace_path=payload.workspace,
                order=payload.order,
            )

        loop = asyncio.get_running_loop()
        plan = await loop.run_in_executor(None, _run_plan)
        return PlanResponse(
            caption=plan.overview.caption,
            components=len(plan.descriptors),
            build_files=plan.build_files,
            overview=overview_to_dict(plan.overview),
            stale_links=[stale_link_to_dict(stale) for stale in plan.stale_links],
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
