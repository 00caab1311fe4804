import uuid as uuid_pkg
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.encryption import token_encryption
from app.models.github_connection import GitHubConnection
from app.services.github import GitHubAnalyticsClient, RemoteUnavailable


class GitHubConnectionOperations:
    """Operations for GitHubConnection model."""

    async def get_by_user_id(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
    ) -> GitHubConnection | None:
        """Get the GitHub connection for a user."""
        statement = select(GitHubConnection).where(
            GitHubConnection.user_id == user_id  # type: ignore[arg-type]
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def save(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        token: str,
        github_login: str | None,
        github_id: int | None,
        scopes: list[str],
    ) -> GitHubConnection:
        """Create or replace the user's connection.

        The token is encrypted before storing if encryption is enabled.
        """
        connection = await self.get_by_user_id(db, user_id)
        if connection is None:
            connection = GitHubConnection(user_id=user_id, access_token="")

        connection.access_token = token_encryption.encrypt(token)
        connection.github_login = github_login
        connection.github_id = github_id
        connection.scopes = ",".join(scopes) or None
        connection.updated_at = datetime.now(UTC)

        db.add(connection)
        await db.flush()
        await db.refresh(connection)
        return connection

    async def delete(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
    ) -> bool:
        """Remove the user's stored token. Returns False if none was stored."""
        connection = await self.get_by_user_id(db, user_id)
        if connection is None:
            return False
        await db.delete(connection)
        await db.flush()
        return True

    def get_decrypted_token(self, connection: GitHubConnection) -> str | None:
        """Get the decrypted access token, or None if not set."""
        if not connection.access_token:
            return None
        return token_encryption.decrypt(connection.access_token)

    async def validate_token(self, token: str) -> dict:
        """
        Validate a GitHub access token against GET /user.

        Returns dict with:
        - 'valid': bool indicating if token is valid
        - 'username', 'github_id', 'name': account identity if valid
        - 'location', 'company': public profile details, may be None
        - 'scopes': List of granted scopes
        - 'scope_warning': Warning if the scopes look insufficient
        - 'error': Error message if invalid
        """
        client = GitHubAnalyticsClient(token)
        try:
            profile, scopes = await client.fetch_authenticated_user()
        except RemoteUnavailable as e:
            return {"valid": False, "error": e.message}

        result: dict = {
            "valid": True,
            "username": profile.login,
            "github_id": profile.github_id,
            "name": profile.name,
            "location": profile.location,
            "company": profile.company,
            "scopes": scopes,
        }

        if not scopes:
            # Fine-grained PAT or no scopes - public data is still readable
            result["scope_warning"] = (
                "Token scopes could not be determined. "
                "Only public profile data may be available."
            )

        return result


github_connection_ops = GitHubConnectionOperations()
