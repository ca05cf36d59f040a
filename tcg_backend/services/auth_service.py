import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tcg_backend.authentication.jwt_authentication import JWTAuthentication, jwt_auth
from tcg_backend.crud import CreateData, ReadData
from tcg_backend.models.schema_models import AuthResponseSchema, UserSchema
from tcg_backend.models.schemas import User
from tcg_backend.services.errors import ConflictError

EMAIL_TAKEN = "A user with this email already exists"
USERNAME_TAKEN = "A user with this username already exists"


def _auth_response(message: str, user: User, auth: JWTAuthentication) -> AuthResponseSchema:
    return AuthResponseSchema(
        message=message,
        token=auth.create_access_token(user.id, user.email),
        user=UserSchema(id=user.id, name=user.username, email=user.email),
    )


async def register_user(
    session: AsyncSession,
    email: str,
    username: str,
    password: str,
    auth: JWTAuthentication = jwt_auth,
) -> AuthResponseSchema:
    """Create the user and sign a token for it.

    Raises:
        ConflictError: The email or the username is already registered
    """
    async with session.begin():
        if await ReadData.read_user_by_email(email, session) is not None:
            raise ConflictError(EMAIL_TAKEN)
        if await ReadData.read_user_by_username(username, session) is not None:
            raise ConflictError(USERNAME_TAKEN)

        hash_password, salt = auth.hash_password(password)
        user = await CreateData.create_user(username, email, hash_password, salt, session)
        response = _auth_response("User created successfully", user, auth)

    logging.info(f"Registered user {user.id} ({username})")
    return response


async def authenticate_user(
    session: AsyncSession,
    email: str,
    password: str,
    auth: JWTAuthentication = jwt_auth,
) -> AuthResponseSchema | None:
    """Check the credentials; None when the email is unknown or the password is wrong."""
    async with session.begin():
        user = await ReadData.read_user_by_email(email, session)
        if user is None:
            logging.info("Sign-in with unknown email")
            return None
        if not auth.verify_password(password, user.salt, user.hash_password):
            logging.info(f"Sign-in with wrong password for user {user.id}")
            return None
        return _auth_response("Signed in successfully", user, auth)
