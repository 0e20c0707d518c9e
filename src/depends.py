from typing import Optional
from fastapi import Depends, Header
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.app.services.auth_service import AuthService
from src.adapter.services.auth_service import HostedAuthService, StaticAuthService
from src.adapter.services.document_capture import SoupDocumentCapture
from src.adapter.services.invoice_view import JinjaInvoiceView
from src.adapter.services.pdf_service import PlaywrightPdfService
from src.adapter.services.render_client import HttpRenderClient
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork


def create_engine_for(db_uri: str, **kwargs) -> AsyncEngine:
    engine = create_async_engine(db_uri, echo=False, future=True, **kwargs)
    if engine.dialect.name == "sqlite":
        # SQLite leaves foreign keys off per connection; line items rely on ON DELETE CASCADE
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = create_engine_for(ApplicationConfig.DB_URI)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work(session: AsyncSession = Depends(get_session)):
    yield SqlAlchemyUnitOfWork(session)


def get_access_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def get_auth_service(access_token: Optional[str] = Depends(get_access_token)) -> AuthService:
    if ApplicationConfig.AUTH_DISABLED:
        return StaticAuthService(ApplicationConfig.DEV_USER_ID, ApplicationConfig.DEV_USER_EMAIL)
    return HostedAuthService(
        auth_url=ApplicationConfig.AUTH_URL,
        api_key=ApplicationConfig.AUTH_API_KEY,
        access_token=access_token,
        timeout=ApplicationConfig.AUTH_TIMEOUT,
    )


def get_invoice_view() -> JinjaInvoiceView:
    return JinjaInvoiceView()


def get_document_capture() -> SoupDocumentCapture:
    return SoupDocumentCapture()


def get_render_client() -> HttpRenderClient:
    return HttpRenderClient(
        ApplicationConfig.render_endpoint(),
        timeout=ApplicationConfig.RENDER_REQUEST_TIMEOUT,
    )


def get_pdf_service() -> PlaywrightPdfService:
    return PlaywrightPdfService(
        content_timeout_ms=ApplicationConfig.RENDER_CONTENT_TIMEOUT_MS,
        image_timeout_ms=ApplicationConfig.RENDER_IMAGE_TIMEOUT_MS,
        executable_path=ApplicationConfig.CHROMIUM_EXECUTABLE_PATH,
    )
