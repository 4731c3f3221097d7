"""FastAPI app factory.

Endpoints are thin wrappers over :class:`github_autocut.cutter.dispatcher.Autocut`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from github_autocut import __version__
from github_autocut.cutter.dispatcher import Autocut, ProjectTarget
from github_autocut.cutter.durations import parse_duration
from github_autocut.cutter.errors import InvalidInputError, NotFoundError, TransportError
from github_autocut.cutter.github.client import GitHubClient
from github_autocut.server.config import ServerSettings
from github_autocut.server.models import CutRequest, CutResponse

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = ServerSettings()

    app = FastAPI(
        title="GitHub Autocut",
        version=__version__,
        description="Deduplicated GitHub issue filing for recurring events.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.settings = settings

    @app.get("/api/v1/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    # Sync handler: FastAPI runs it in a worker thread, so blocking GitHub calls are fine.
    @app.post("/api/v1/cut", response_model=CutResponse)
    def cut(req: CutRequest) -> CutResponse:
        if not settings.github_token.strip():
            raise HTTPException(
                status_code=409,
                detail="AUTOCUT_GITHUB_TOKEN (or GITHUB_TOKEN) is required for this endpoint",
            )

        try:
            age_threshold = parse_duration(req.age_threshold)
        except InvalidInputError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

        project = ProjectTarget.from_names(
            req.project if req.project is not None else settings.project_name,
            req.column if req.column is not None else settings.project_column,
        )
        repository = f"{req.owner}/{req.repo}"

        try:
            github = GitHubClient(
                token=settings.github_token,
                repository=repository,
                base_url=settings.github_base_url,
                timeout=settings.request_timeout_seconds,
            )
            try:
                autocut = Autocut(
                    tracker=github,
                    age_threshold=age_threshold,
                    label=settings.sentinel_label,
                    project=project,
                )
                result = autocut.cut(
                    title=req.title, details=req.details, custom_labels=req.labels
                )
            finally:
                github.close()
        except InvalidInputError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        except TransportError as e:
            logger.warning(str(e), extra={"repo": repository, "operation": e.operation})
            raise HTTPException(status_code=502, detail=str(e)) from e

        return CutResponse.from_result(result)

    return app
