"""FastAPI dependency providers.

Services are built once per application by a ServiceContainer stored on
``app.state.container``; nothing is cached at module level. The caller's
identity is resolved per request into an AuthSession.

Usage in routes:
    from listings.api.dependencies import get_wizard_store, require_user

    @router.post("/listings/wizard")
    async def create_wizard(
        user: UserSession = Depends(require_user),
        store: WizardStore = Depends(get_wizard_store),
    ):
        ...

Service Dependency Graph:
    Settings
        ├── DynamoDBService
        ├── ObjectStorageService
        ├── AccountService
        ├── PropertyService (db, storage)
        └── WizardStore (db, storage)

Testing:
    Build a ServiceContainer with stub services and pass it to create_app().
"""

from datetime import timedelta
from functools import cached_property

from fastapi import Depends, Request

from listings.config import Settings, get_settings
from listings.models import UserSession
from listings.services.auth_service import AccountService
from listings.services.auth_session import AuthSession
from listings.services.dynamodb import DynamoDBService
from listings.services.properties import PropertyService
from listings.services.storage import ObjectStorageService
from listings.services.wizard_store import WizardStore


class ServiceContainer:
    """Lazily constructed services for one application instance."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @cached_property
    def db(self) -> DynamoDBService:
        return DynamoDBService(
            environment=self.settings.environment,
            table_prefix=self.settings.table_prefix,
            region=self.settings.aws_default_region,
        )

    @cached_property
    def storage(self) -> ObjectStorageService:
        return ObjectStorageService(
            bucket=self.settings.property_images_bucket,
            region=self.settings.aws_default_region,
            public_base_url=self.settings.public_asset_base_url,
        )

    @cached_property
    def accounts(self) -> AccountService:
        return AccountService(
            user_pool_id=self.settings.cognito_user_pool_id,
            client_id=self.settings.cognito_client_id,
            region=self.settings.aws_default_region,
        )

    @cached_property
    def properties(self) -> PropertyService:
        return PropertyService(db=self.db, storage=self.storage)

    @cached_property
    def wizards(self) -> WizardStore:
        return WizardStore(
            db=self.db,
            storage=self.storage,
            idle_ttl=timedelta(minutes=self.settings.wizard_idle_minutes),
            submitted_ttl=timedelta(minutes=self.settings.wizard_submitted_minutes),
            max_sessions=self.settings.wizard_max_sessions,
        )


def get_container(request: Request) -> ServiceContainer:
    container: ServiceContainer = request.app.state.container
    return container


def get_wizard_store(container: ServiceContainer = Depends(get_container)) -> WizardStore:
    return container.wizards


def get_property_service(
    container: ServiceContainer = Depends(get_container),
) -> PropertyService:
    return container.properties


def get_account_service(
    container: ServiceContainer = Depends(get_container),
) -> AccountService:
    return container.accounts


def get_auth_session(
    request: Request, container: ServiceContainer = Depends(get_container)
) -> AuthSession:
    """Resolve the caller from x-user-sub, or a Bearer token where trusted."""
    return AuthSession.from_headers(
        request.headers, trust_bearer=container.settings.bearer_tokens_trusted
    )


def require_user(auth: AuthSession = Depends(get_auth_session)) -> UserSession:
    """Dependency for endpoints that need a signed-in user (401 otherwise)."""
    return auth.require_session()


def require_anonymous(auth: AuthSession = Depends(get_auth_session)) -> None:
    """Dependency for sign-up and login endpoints (403 when signed in)."""
    auth.require_no_session()
