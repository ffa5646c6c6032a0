"""Learner account.

Accounts are created by the signup flow; this service only reads them to
report user statistics on the admin dashboard.
"""

from datetime import UTC, datetime
from typing import Optional

from pydantic import Field

from ziora.domain.model.common import DomainModel
from ziora.domain.value import AccountId, UserStatus


class User(DomainModel):
    """Learner account."""

    id: AccountId
    email: str
    name: Optional[str] = None
    status: UserStatus = UserStatus.ACTIVE
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
