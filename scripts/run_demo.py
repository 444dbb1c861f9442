#!/usr/bin/env python3
"""Render a seeded thread scope through the production container."""

import asyncio
import sys
from datetime import datetime, timedelta

import logfire

from chorus.application.session_manager import SessionManager
from chorus.application.usecase.thread import (
    GetThreadRequest,
    GetThreadUseCase,
    SubmitReplyRequest,
    SubmitReplyUseCase,
)
from chorus.config import Settings
from chorus.domain.model.reply import Reply
from chorus.domain.repository import RecordStore
from chorus.domain.value import ReplyId, ScopeId, UserId
from chorus.util.di.container import create_container
from chorus.util.logging import get_logger, setup_logging
from chorus.util.observability import configure_logfire, route_stdlib_logging

SCOPE = ScopeId("demo")

logger = get_logger(__name__)


def demo_replies() -> list[Reply]:
    """A top-level reply with four answers; the oldest but one is popular."""
    start = datetime(2024, 3, 1, 12, 0)
    replies = [
        Reply(
            id=ReplyId("root"),
            scope_id=SCOPE,
            author_id=UserId("ada"),
            author_display_name="Ada",
            content="Does anyone have the replication data?",
            created_at=start,
        )
    ]
    for i, likes in enumerate([0, 5, 0, 1], start=1):
        replies.append(
            Reply(
                id=ReplyId(f"answer-{i}"),
                scope_id=SCOPE,
                author_id=UserId(f"user-{i}"),
                author_display_name=f"User {i}",
                content=f"Answer number {i}",
                parent_id=ReplyId("root"),
                created_at=start + timedelta(minutes=i),
                like_count=likes,
            )
        )
    return replies


async def run() -> None:
    container = create_container()
    try:
        store = await container.get(RecordStore)
        store.seed(demo_replies())

        async with container() as request_container:
            get_thread = await request_container.get(GetThreadUseCase)
            submit = await request_container.get(SubmitReplyUseCase)

            request = GetThreadRequest(scope_id=SCOPE, viewer_id="grace")
            print((await get_thread.execute(request)).model_dump_json(indent=2))

            await submit.execute(
                SubmitReplyRequest(
                    scope_id=SCOPE,
                    viewer_id="grace",
                    viewer_display_name="Grace",
                    content="Uploaded it to the shared drive.",
                    parent_id="answer-1",
                )
            )
            print((await get_thread.execute(request)).model_dump_json(indent=2))

        session_manager = await container.get(SessionManager)
        await session_manager.close_all()
    finally:
        await container.close()


def main() -> int:
    """Run the demo and log any failure to Logfire."""
    settings = Settings()

    configure_logfire(settings)
    setup_logging(settings)
    route_stdlib_logging()

    try:
        logger.info("Starting thread demo")
        asyncio.run(run())
        return 0

    except Exception as e:
        logfire.error(
            "Thread demo failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
