#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Web server for the AdTech strategy summary using FastAPI.

Routes:
    POST /api/summarize-news  throttled summary as {header, summary}
    GET  /feed.xml            RSS view of the cached summary
    GET  /api/status          cache and throttle state
"""

import logging
import os
from typing import Optional

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool

from cache import create_store
from common.errors import GenerationFailed, MissingInput
from summarization.base import create_summarizer
from summarization.coordinator import SummaryCoordinator, current_millis
from utils.config import Settings
from views.feed_view import FEED_CONTENT_TYPE, FeedChannel, render_feed, write_feed
from views.json_view import render_json_view

logger = logging.getLogger(__name__)

router = APIRouter()


def get_coordinator(request: Request) -> SummaryCoordinator:
    """Coordinator attached to the running application."""
    return request.app.state.coordinator


def get_settings(request: Request) -> Settings:
    """Settings attached to the running application."""
    return request.app.state.settings


@router.post("/api/summarize-news")
async def summarize_news(request: Request):
    """Return the throttled AI summary of the posted dashboard content."""
    try:
        data = await request.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    html_content = data.get('htmlContent')
    if not isinstance(html_content, str):
        html_content = None
    force_regenerate = data.get('forceRegenerate') is True

    coordinator = get_coordinator(request)
    settings = get_settings(request)
    channel = request.app.state.channel
    now = current_millis()

    def publish_feed(result):
        write_feed(settings.feed_path, render_feed(result.generated_at, result.summary, channel))

    try:
        result = await coordinator.obtain_summary(
            html_content, now, force_regenerate, on_generated=publish_feed
        )
    except MissingInput as e:
        return JSONResponse(status_code=400, content={'error': str(e)})
    except GenerationFailed as e:
        logger.error(f"Claude API Error: {e}")
        return JSONResponse(
            status_code=500,
            content={'error': f"Failed to generate AI summary: {e.message}"}
        )

    return render_json_view(result, now, coordinator.window_ms, settings.display_timezone)


@router.get("/feed.xml")
async def feed(request: Request):
    """Serve the RSS feed rendered from the cached summary."""
    cached = await get_coordinator(request).peek(current_millis())
    if cached is None:
        return JSONResponse(status_code=404, content={'error': 'No summary has been generated yet.'})

    entry, _ = cached
    document = render_feed(entry.generated_at, entry.payload, request.app.state.channel)
    return Response(content=document, media_type=FEED_CONTENT_TYPE)


@router.get("/api/status")
async def status(request: Request):
    """Return the cache and throttle state."""
    coordinator = get_coordinator(request)
    settings = get_settings(request)
    cached = await coordinator.peek(current_millis())

    body = {
        'has_summary': cached is not None,
        'generated_at': None,
        'is_fresh': False,
        'next_eligible_at': None,
        'remaining_ms': None,
        'throttle_minutes': settings.throttle_minutes,
        'cache': await run_in_threadpool(coordinator.store.describe),
    }
    if cached is not None:
        entry, decision = cached
        body.update({
            'generated_at': entry.generated_at,
            'is_fresh': decision.is_fresh,
            'next_eligible_at': decision.next_eligible_at,
            'remaining_ms': decision.remaining,
        })
    return JSONResponse(body)


def create_app(
    settings: Optional[Settings] = None,
    store=None,
    summarizer=None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Runtime settings (read from the environment if omitted)
        store: Summary store (built from settings if omitted)
        summarizer: Summarizer provider (built from settings if omitted)

    Returns:
        FastAPI application
    """
    settings = settings or Settings.from_env()
    store = store if store is not None else create_store(settings)
    summarizer = summarizer if summarizer is not None else create_summarizer(settings)

    app = FastAPI(title="AdTech News - AI Strategy Summary")
    app.state.settings = settings
    app.state.coordinator = SummaryCoordinator(store, summarizer, settings.throttle_ms)
    app.state.channel = FeedChannel.from_settings(settings)
    app.include_router(router)

    # Static dashboard, mounted last so the API routes take precedence
    if settings.public_dir and os.path.isdir(settings.public_dir):
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
        logger.info(f"Serving static files from {settings.public_dir}")

    return app


if __name__ == '__main__':
    import uvicorn
    from common.logging import configure_logging

    settings = Settings.from_env()
    configure_logging(level=settings.log_level, log_file=settings.log_file)
    uvicorn.run("server:create_app", factory=True, host=settings.host, port=settings.port, workers=1)
