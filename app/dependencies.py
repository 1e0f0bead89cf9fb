# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends

from core.services.session_service import SessionService, get_session_service


# Type alias for dependency injection
# Tests swap the store via app.dependency_overrides[get_session_service]
SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]
