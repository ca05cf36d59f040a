from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tcg_backend.db import get_session
from tcg_backend.models.dc_models import SignInModel, SignUpModel
from tcg_backend.models.schema_models import AuthInfoSchema, AuthResponseSchema
from tcg_backend.services import auth_service
from tcg_backend.services.errors import ConflictError

MISSING_DATA = "Missing data"
INVALID_CREDENTIALS = "Invalid email or password"

auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


class AuthAPI:
    @staticmethod
    @auth_router.get("", response_model=AuthInfoSchema)
    async def auth_info():
        return AuthInfoSchema(
            message="Auth route is accessible",
            info="Use POST /api/auth/sign-in or /api/auth/sign-up",
        )

    @staticmethod
    @auth_router.post(
        "/sign-up",
        response_model=AuthResponseSchema,
        status_code=status.HTTP_201_CREATED,
    )
    async def sign_up(body: SignUpModel, session: AsyncSession = Depends(get_session)):
        """Register a user and return a signed token

        Args:
            body (SignUpModel): email, username and password, all required

        Returns:
            AuthResponseSchema: message, token and public user data
        """
        if not body.email or not body.username or not body.password:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_DATA)
        try:
            return await auth_service.register_user(
                session, body.email, body.username, body.password
            )
        except ConflictError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    @staticmethod
    @auth_router.post("/sign-in", response_model=AuthResponseSchema)
    async def sign_in(body: SignInModel, session: AsyncSession = Depends(get_session)):
        if not body.email or not body.password:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_DATA)
        response = await auth_service.authenticate_user(session, body.email, body.password)
        if response is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_CREDENTIALS,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return response
