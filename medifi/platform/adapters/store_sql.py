import logging
from datetime import datetime
from sqlalchemy import JSON, String, TIMESTAMP, delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from medifi.core.base import utcnow
from medifi.platform.ports.document_store import DocumentStorePort

log = logging.getLogger("store.sql")

class Base(DeclarativeBase):
    pass

class StoredDocument(Base):
    __tablename__ = "document"

    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    body: Mapped[dict] = mapped_column(JSON)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow)

class SqlDocumentStore(DocumentStorePort):
    def __init__(self, dsn: str):
        self.engine = create_async_engine(dsn, pool_pre_ping=True)
        self.SessionLocal = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    async def connect(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log.info(f"SQL document store ready on {self.engine.url.render_as_string(hide_password=True)}")

    async def get(self, collection: str, key: str) -> dict | None:
        async with self.SessionLocal() as session:
            obj = await session.get(StoredDocument, (collection, key))
            return dict(obj.body) if obj else None

    async def put(self, collection: str, key: str, doc: dict) -> None:
        async with self.SessionLocal() as session:
            obj = await session.get(StoredDocument, (collection, key))
            if obj is None:
                session.add(StoredDocument(collection=collection, key=key, body=dict(doc)))
            else:
                obj.body = dict(doc)
            await session.commit()

    async def delete(self, collection: str, key: str) -> bool:
        async with self.SessionLocal() as session:
            res = await session.execute(
                delete(StoredDocument).where(
                    StoredDocument.collection == collection,
                    StoredDocument.key == key,
                )
            )
            await session.commit()
            return res.rowcount > 0

    async def scan(self, collection: str) -> list[dict]:
        async with self.SessionLocal() as session:
            q = select(StoredDocument).where(StoredDocument.collection == collection).order_by(StoredDocument.key)
            res = await session.execute(q)
            return [dict(obj.body) for obj in res.scalars().all()]

    async def close(self) -> None:
        await self.engine.dispose()
