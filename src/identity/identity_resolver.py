from loggers import get_logger
from src.core.utils.security import mask_login, plain_passwords_match
from src.identity.claims import ClaimSet
from src.user.repositories import UserLookup, UserRecord

logger = get_logger(__name__)


class IdentityResolver:
    """Turns a login, with or without a password, into the claim set tokens carry."""

    def __init__(self, users: UserLookup) -> None:
        self.users = users

    @staticmethod
    def build_claims(user: UserRecord) -> ClaimSet:
        return ClaimSet.for_login(user.login)

    async def resolve_by_credentials(self, login: str, password: str) -> ClaimSet | None:
        user = await self.users.find_by_login(login)
        if user is None:
            logger.warning("[IdentityResolver] User '%s' not found", mask_login(login))
            return None

        if not plain_passwords_match(password, user.password):
            logger.warning(
                "[IdentityResolver] Wrong password for user '%s'", mask_login(login)
            )
            return None

        return self.build_claims(user)

    async def resolve_by_login(self, login: str) -> ClaimSet | None:
        user = await self.users.find_by_login(login)
        if user is None:
            logger.warning("[IdentityResolver] User '%s' not found", mask_login(login))
            return None
        return self.build_claims(user)
