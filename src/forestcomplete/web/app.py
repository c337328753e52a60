"""FastAPI application editors use to query completions and create trees."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from forestcomplete.completion.provider import complete
from forestcomplete.config import ForesterSettings
from forestcomplete.diagnostics import RecordingReporter
from forestcomplete.forest.cache import ForestCache
from forestcomplete.forest.create import create_tree
from forestcomplete.forest.project import (
    resolve_prefix,
    resolve_template,
    root_tree_directory,
    validate_prefix,
)
from forestcomplete.forest.query import ForestQuery
from forestcomplete.process.command import SubprocessExecutor
from forestcomplete.process.runner import ProcessRunner

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="forestcomplete", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class CompletePayload(BaseModel):
    text: str
    cursor: int | None = None
    line: int = 0
    show_id: bool | None = None


class NewTreePayload(BaseModel):
    dest: str | None = None
    prefix: str | None = None
    template: str | None = None


def configure(
    target: FastAPI,
    settings: ForesterSettings,
    root: Path,
    runner: ProcessRunner | None = None,
) -> None:
    """Attach settings and a fresh forest cache to the application."""
    reporter = RecordingReporter()
    target.state.settings = settings
    target.state.root = root
    target.state.reporter = reporter
    target.state.cache = ForestCache(ForestQuery(settings, root, reporter, runner))


def _state() -> Any:
    if getattr(app.state, "cache", None) is None:
        configure(app, ForesterSettings(), Path.cwd())
    return app.state


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/forest")
async def list_forest() -> dict[str, Any]:
    state = _state()
    forest = await state.cache.get()
    return {
        "trees": [entry.to_dict() for entry in forest],
        "messages": _messages(state),
    }


@app.post("/forest/invalidate")
async def invalidate_forest() -> dict[str, str]:
    _state().cache.invalidate()
    return {"status": "ok"}


@app.post("/complete")
async def complete_reference(payload: CompletePayload) -> dict[str, Any]:
    state = _state()
    show_id = state.settings.show_id if payload.show_id is None else payload.show_id
    candidates = await complete(
        payload.text,
        state.cache,
        cursor=payload.cursor,
        line=payload.line,
        show_id=show_id,
    )
    return {
        "items": [candidate.to_dict() for candidate in candidates],
        "messages": _messages(state),
    }


@app.post("/new")
async def new_tree(payload: NewTreePayload) -> dict[str, Any]:
    state = _state()
    settings: ForesterSettings = state.settings
    prefix = resolve_prefix(settings, payload.prefix)
    problem = validate_prefix(prefix)
    if problem:
        raise HTTPException(status_code=400, detail=problem)

    dest = Path(payload.dest) if payload.dest else root_tree_directory(state.root, settings)
    created = await create_tree(
        SubprocessExecutor(state.reporter),
        settings,
        state.root,
        dest,
        prefix,  # type: ignore[arg-type]
        resolve_template(settings, payload.template),
    )
    messages = _messages(state)
    if created is None:
        detail = "\n".join(text for _, text in messages) or "forester did not create a tree"
        raise HTTPException(status_code=500, detail=detail)
    state.cache.invalidate()
    return {"path": str(created), "messages": messages}


def _messages(state: Any) -> List[dict[str, str]]:
    return [{"level": level, "message": text} for level, text in state.reporter.drain()]
