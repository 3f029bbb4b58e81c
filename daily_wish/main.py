import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, Response

from .clock import today_utc
from .frames import FramePayload, parse_payload, resolve_choice, resolve_day, resolve_identity
from .kv_store import KVStore, KVStoreError, NullKVStore, build_store
from .logging_config import setup_logging
from .render import WishView, render_card, render_entry, render_wish
from .settings import AppSettings, KVSettings, settings
from .votes import VoteOutcome, has_voted, read_stats, record_vote
from .wishes import WISHES, wish_for

logger = logging.getLogger(__name__)

ALREADY_VOTED_NOTICE = "You've already voted today. Come back tomorrow!"
VOTE_NOTICES = {
    VoteOutcome.RECORDED: "Your vote has been recorded. Come back tomorrow for a new wish!",
    VoteOutcome.ALREADY_VOTED: ALREADY_VOTED_NOTICE,
    VoteOutcome.INVALID_CHOICE: "Pick Like or Dislike to vote.",
}
STORAGE_OFF_NOTICE = "Votes are not being stored right now."


def get_store(request: Request) -> KVStore:
    return request.app.state.store


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_today() -> str:
    return today_utc()


async def frame_payload(request: Request) -> FramePayload | None:
    return parse_payload(await request.body())


def create_app(
    app_settings: AppSettings | None = None,
    kv_settings: KVSettings | None = None,
    store: KVStore | None = None,
) -> FastAPI:
    """Build the app. A passed-in store stays owned by the caller."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = store is None
        app.state.store = store if store is not None else build_store(kv_settings or KVSettings())
        yield
        if owned:
            app.state.store.close()

    app = FastAPI(title="Daily Wish Frame", lifespan=lifespan)
    app.state.settings = app_settings

    @app.get("/api/wish", response_class=HTMLResponse)
    def wish_entry(cfg: AppSettings = Depends(get_settings)):
        return HTMLResponse(render_entry(cfg.base_url))

    @app.post("/api/wish", response_class=HTMLResponse)
    def wish_reveal(
        fid: str | None = None,
        payload: FramePayload | None = Depends(frame_payload),
        store: KVStore = Depends(get_store),
        cfg: AppSettings = Depends(get_settings),
        today: str = Depends(get_today),
    ):
        identity = resolve_identity(payload, fid)
        idx, wish = wish_for(identity, today)
        stats = read_stats(store, today, idx, cfg.vote_namespace)
        voted = has_voted(store, today, idx, identity, cfg.vote_namespace)

        view = WishView(
            day=today,
            wish=wish,
            stats=stats,
            has_identity=identity is not None,
            can_vote=identity is not None and not voted,
            notice=ALREADY_VOTED_NOTICE if voted else None,
        )
        return HTMLResponse(render_wish(view, cfg.base_url))

    @app.post("/api/vote", response_class=HTMLResponse)
    def vote(
        fid: str | None = None,
        choice: str | None = None,
        date: str | None = None,
        payload: FramePayload | None = Depends(frame_payload),
        store: KVStore = Depends(get_store),
        cfg: AppSettings = Depends(get_settings),
        today: str = Depends(get_today),
    ):
        identity = resolve_identity(payload, fid)
        day = resolve_day(payload, date, today)
        idx, wish = wish_for(identity, day)

        try:
            outcome = record_vote(store, day, idx, identity, resolve_choice(payload, choice), cfg.vote_namespace)
        except KVStoreError as e:
            logger.error("Vote from %s for %s #%d not recorded: %s", identity, day, idx, e)
            raise HTTPException(status_code=503, detail="Vote could not be recorded, please try again") from e

        can_vote = False
        if outcome is VoteOutcome.INVALID_CHOICE:
            can_vote = not has_voted(store, day, idx, identity, cfg.vote_namespace)

        notice = VOTE_NOTICES.get(outcome)
        if isinstance(store, NullKVStore) and identity is not None:
            notice = STORAGE_OFF_NOTICE

        view = WishView(
            day=day,
            wish=wish,
            stats=read_stats(store, day, idx, cfg.vote_namespace),
            has_identity=identity is not None,
            can_vote=can_vote,
            thanks=outcome in (VoteOutcome.RECORDED, VoteOutcome.ALREADY_VOTED),
            notice=notice,
        )
        return HTMLResponse(render_wish(view, cfg.base_url))

    @app.get("/api/og")
    def card(
        text: str | None = None,
        stats: str | None = None,
        voted: bool = False,
        cfg: AppSettings = Depends(get_settings),
    ):
        return Response(
            content=render_card(text, stats, voted),
            media_type="image/svg+xml",
            headers={"Cache-Control": f"public, max-age={cfg.card_cache_seconds}"},
        )

    @app.get("/health")
    def health(store: KVStore = Depends(get_store)):
        return {"status": "ok", "store": store.name, "wishes": len(WISHES)}

    return app


app = create_app()


def run() -> None:
    setup_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)
