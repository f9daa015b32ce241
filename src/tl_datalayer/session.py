"""Per-session bookkeeping kept in the page's session storage."""

from __future__ import annotations

import time
import uuid

from .context import PageContext

SESSION_KEY = "tlp_session_id"
PREVIOUS_PAGE_KEY = "tlp_previous_page"
DIRECT = "direct"


def generate_session_id() -> str:
    """tlp_<epoch millis>_<13 random hex chars>."""
    return f"tlp_{int(time.time() * 1000)}_{uuid.uuid4().hex[:13]}"


def get_session_id(ctx: PageContext) -> str:
    """Session id, created on first use."""
    if not ctx.available:
        return ""
    session_id = ctx.session_storage.get(SESSION_KEY)
    if not session_id:
        session_id = generate_session_id()
        ctx.session_storage[SESSION_KEY] = session_id
    return session_id


def get_previous_page(ctx: PageContext) -> str:
    if not ctx.available:
        return DIRECT
    return ctx.session_storage.get(PREVIOUS_PAGE_KEY) or DIRECT


def set_current_page_as_previous(ctx: PageContext, page_name: str) -> None:
    if ctx.available:
        ctx.session_storage[PREVIOUS_PAGE_KEY] = page_name
