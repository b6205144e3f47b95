from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from services.store import count_active


class ApplicationLimiter:
    """
    Caps the number of active (SUBMITTED or UNDER_REVIEW) applications a
    customer may hold. The check is only meaningful when the caller keeps the
    count and the following insert inside one customer-scoped critical section.
    """

    def __init__(self, ceiling: Optional[int] = None) -> None:
        self.ceiling = settings.max_active_applications if ceiling is None else ceiling

    def allows(self, active_count: int) -> bool:
        return active_count < self.ceiling

    async def can_submit(self, session: AsyncSession, customer_id: str) -> bool:
        return self.allows(await count_active(session, customer_id))
