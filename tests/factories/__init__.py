"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import AccountFactory, TeamFactory, ...
"""

from tests.factories.account import (
    DEFAULT_TEST_PASSWORD,
    DEFAULT_TEST_PASSWORD_HASH,
    AccountFactory,
)
from tests.factories.base import BaseFactory, next_sequence, utc_now
from tests.factories.team import (
    MemberClaimFactory,
    RosterEntryFactory,
    TeamFactory,
    TeamMembershipFactory,
)

__all__ = [
    # Base
    "BaseFactory",
    "next_sequence",
    "utc_now",
    # Account
    "AccountFactory",
    "DEFAULT_TEST_PASSWORD",
    "DEFAULT_TEST_PASSWORD_HASH",
    # Teams
    "MemberClaimFactory",
    "RosterEntryFactory",
    "TeamFactory",
    "TeamMembershipFactory",
]
