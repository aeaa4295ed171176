"""Active draft session for the HTTP layer."""

from __future__ import annotations

import logging
import random
from typing import Optional

from ..config import draft_config
from ..models.card import CardClass
from ..models.draft import ClassPreview, DraftSession
from .catalog_loader import get_catalog
from .draft_engine import DraftController

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Singleton session state
# ---------------------------------------------------------------------------
_controller: Optional[DraftController] = None
_session: Optional[DraftSession] = None
_previews: dict[CardClass, ClassPreview] = {}


def get_controller() -> DraftController:
    """Return the controller, rebuilding it whenever the loaded catalog changes."""
    global _controller
    catalog = get_catalog()
    if _controller is None or _controller.catalog is not catalog:
        if _controller is not None:
            logger.info(f"Catalog changed ({len(catalog)} cards), rebuilding draft controller")
        _controller = DraftController(catalog, draft_config)
        _previews.clear()
    return _controller


def use_controller(controller: DraftController) -> None:
    """Swap in a controller (seeded RNG, custom config). Also restarts."""
    global _controller
    restart()
    _controller = controller


def seed(value: int) -> None:
    """Reseed the active controller's random source."""
    get_controller().rng = random.Random(value)


def get_previews() -> list[ClassPreview]:
    """Class-selection tiles; sampled once per session, then reused."""
    if not _previews:
        for preview in get_controller().preview_all():
            _previews[preview.card_class] = preview
    return list(_previews.values())


def get_session() -> Optional[DraftSession]:
    return _session


def require_session() -> DraftSession:
    if _session is None:
        raise ValueError("No draft in progress. Choose a class first.")
    return _session


def choose_class(card_class: CardClass) -> DraftSession:
    global _session
    if card_class is CardClass.NEUTRAL:
        raise ValueError("Neutral is not a playable class")
    if _session is not None:
        raise ValueError(f"A {_session.current_class.value} draft is already in progress")

    controller = get_controller()
    preview = _previews.get(card_class)
    if preview is None:
        preview = controller.preview_class(card_class)
    _session = controller.start(preview)
    return _session


def pick_pair(pair_index: int) -> DraftSession:
    session = require_session()
    return get_controller().pick(session, pair_index)


def reroll() -> DraftSession:
    session = require_session()
    return get_controller().reroll(session)


def restart() -> None:
    """Drop the session and previews, as if freshly started."""
    global _session
    if _session is not None:
        logger.info(f"Draft restarted at round {_session.round}")
    _session = None
    _previews.clear()


def reset_tracker() -> None:
    """Tear down controller and session (useful in tests)."""
    global _controller
    restart()
    _controller = None
