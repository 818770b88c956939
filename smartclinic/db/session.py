from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, select

from smartclinic.core.config import settings
from smartclinic.core.logger import logger
from smartclinic.core.security import get_password_hash
from smartclinic.db.models import Admin

engine = create_async_engine(settings.DATABASE_URL, echo=False, future=True)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

async def get_session():
    async with async_session() as session:
        yield session

async def seed_admin(session: AsyncSession, username: str, password: str | None) -> Admin | None:
    """Create the configured admin account unless it already exists."""
    if not password:
        return None

    result = await session.execute(select(Admin).where(Admin.username == username))
    admin = result.scalars().first()
    if admin:
        return admin

    admin = Admin(username=username, password_hash=get_password_hash(password))
    session.add(admin)
    await session.commit()
    await session.refresh(admin)
    logger.info(f"Seeded admin account '{username}'")
    return admin

async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with async_session() as session:
        await seed_admin(session, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
