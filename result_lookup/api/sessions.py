"""
In-memory lookup sessions.
One controller per browser/API client, keyed by a cookie value.
"""

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from result_lookup.domain.services.result_lookup_controller import ResultLookupController

logger = logging.getLogger(__name__)


class LookupSessionRegistry:
    def __init__(self, factory: Callable[[], ResultLookupController], max_entries: int = 1000):
        self._factory = factory
        self._max_entries = max(1, max_entries)
        self._sessions: "OrderedDict[str, ResultLookupController]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: Optional[str]) -> Optional[ResultLookupController]:
        if not session_id:
            return None
        controller = self._sessions.get(session_id)
        if controller is not None:
            self._sessions.move_to_end(session_id)
        return controller

    async def get_or_create(self, session_id: Optional[str]) -> Tuple[str, ResultLookupController]:
        """
        Return the session's controller, creating and initializing a new one
        (catalog load included) when the id is unknown. A controller is only
        registered once its initialization has returned.
        """
        controller = self.get(session_id)
        if controller is not None:
            return session_id, controller

        controller = self._factory()
        await controller.initialize()

        session_id = uuid.uuid4().hex
        self._sessions[session_id] = controller
        while len(self._sessions) > self._max_entries:
            evicted, _ = self._sessions.popitem(last=False)
            logger.debug("Evicted lookup session %s", evicted)
        return session_id, controller

    def clear(self) -> None:
        self._sessions.clear()
