"""Test helper functions for common data creation patterns."""

import re
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from src.teamkick.core.notifications import EmailSendResult
from src.teamkick.models import Account, RosterEntry, Team, TeamMembership, TeamRole
from tests.factories import (
    AccountFactory,
    RosterEntryFactory,
    TeamFactory,
    TeamMembershipFactory,
)

_TOKEN_IN_LINK = re.compile(r"[?&]token=([A-Za-z0-9_\-]+)")


@dataclass
class SentEmail:
    to: str
    subject: str
    html: str
    text: str

    @property
    def token(self) -> str:
        """Token carried by the link in the email body."""
        match = _TOKEN_IN_LINK.search(self.text)
        assert match is not None, f"no token link in email: {self.text!r}"
        return match.group(1)

    @property
    def link(self) -> str:
        match = re.search(r"https?://\S+", self.text)
        assert match is not None
        return match.group(0)


@dataclass
class RecordingEmailSender:
    """Stands in for EmailSender; ``fail`` makes every send report failure."""

    sent: list[SentEmail] = field(default_factory=list)
    fail: bool = False

    async def send_email(self, to: str, subject: str, html: str, text: str) -> EmailSendResult:
        if self.fail:
            return EmailSendResult(success=False, message="Simulated failure")
        self.sent.append(SentEmail(to=to, subject=subject, html=html, text=text))
        return EmailSendResult(success=True, message="Email sent")

    def shutdown(self) -> None:
        pass

    @property
    def last(self) -> SentEmail:
        assert self.sent, "no email was sent"
        return self.sent[-1]


async def create_account(session: AsyncSession, **kwargs) -> Account:
    """Persist an account built by AccountFactory."""
    account = AccountFactory.build(**kwargs)
    session.add(account)
    await session.commit()
    return account


async def create_team_with_admin(
    session: AsyncSession,
    admin: Account,
    role: TeamRole = TeamRole.ADMIN,
    **team_kwargs,
) -> tuple[Team, TeamMembership]:
    """Create a team and give ``admin`` a membership with ``role``.

    Returns:
        Tuple of (team, membership)
    """
    team = TeamFactory.build(created_by_id=admin.id, **team_kwargs)
    session.add(team)
    await session.flush()

    membership = TeamMembershipFactory.build(
        team_id=team.id, account_id=admin.id, role=role.value
    )
    session.add(membership)
    await session.commit()
    return team, membership


async def add_member(
    session: AsyncSession, team: Team, account: Account, role: TeamRole = TeamRole.PLAYER
) -> TeamMembership:
    membership = TeamMembershipFactory.build(
        team_id=team.id, account_id=account.id, role=role.value
    )
    session.add(membership)
    await session.commit()
    return membership


async def add_roster_entry(session: AsyncSession, team: Team, **kwargs) -> RosterEntry:
    """Add an unlinked roster entry to the team."""
    entry = RosterEntryFactory.build(team_id=team.id, **kwargs)
    session.add(entry)
    await session.commit()
    return entry
