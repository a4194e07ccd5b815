"""
Identity resolution service - drives the OAuth client pipeline for a login callback

Steps:
- exchange the authorization code for an access token
- fetch the user profile
- fetch the user's email addresses
- map the result onto an account record for provisioning
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from loguru import logger

from identity_gate.core.oauth.client import GitHubClient
from identity_gate.core.oauth.models import Account, Email, User

LOG_PREFIX = "[IdentityService]"


@dataclass(frozen=True)
class ResolvedIdentity:
    """Everything learned about the user from one authorization code."""

    access_token: str
    user: User
    emails: List[Email]
    account: Account

    def __repr__(self) -> str:
        return f"ResolvedIdentity(user={self.user.login!r}, emails={len(self.emails)}, account={self.account!r})"


def select_primary_email(emails: Sequence[Email]) -> Optional[Email]:
    """
    Pick the address to provision with.

    Verified primary first, then any verified address. Unverified addresses are never picked.
    """
    verified = [e for e in emails if e.verified]
    for email in verified:
        if email.primary:
            return email
    return verified[0] if verified else None


class IdentityService:
    """Identity resolution service"""

    def __init__(self, client: GitHubClient):
        self.client = client

    async def resolve(self, code: str) -> ResolvedIdentity:
        """
        Resolve an authorization code into a user, their emails and an account record.

        Errors from the client propagate unchanged; the code cannot be reused after a failure.
        """
        access_token = await self.client.authenticate(code)
        user = await self.client.fetch_user(access_token)
        emails = await self.client.fetch_emails(access_token)

        account = user.to_account()
        if not account.email:
            chosen = select_primary_email(emails)
            if chosen:
                account = Account(name=account.name, email=chosen.email)

        logger.info(
            f"{LOG_PREFIX} Resolved identity for {user.login} "
            f"({len(emails)} emails, account email {'set' if account.email else 'unset'})"
        )
        return ResolvedIdentity(access_token=access_token, user=user, emails=emails, account=account)
