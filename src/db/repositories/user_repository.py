from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models.user import User
from db.repositories.decorators import with_retry


@with_retry(log_prefix="fetching user by email")
async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Return the user with exactly this email, or None."""
    stmt = select(User).where(User.email == email)
    res = await db.execute(stmt)
    return res.scalars().first()
