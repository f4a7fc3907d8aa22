"""Rutas de autenticación: registro, emisión de token y usuario actual."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import WWW_AUTHENTICATE, get_current_user, get_user_repository
from app.api.schemas.auth import RegisterPayload, TokenOut, TokenPayload
from app.api.schemas.user import User, UserOut
from app.repositories.user_repo import UserRepository
from app.services import auth_service as service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar usuario",
    description="Crea un usuario local; el username será el `author` de sus notas.",
)
def register(payload: RegisterPayload, users: UserRepository = Depends(get_user_repository)) -> UserOut:
    user = service.register_user(users, username=payload.username, password=payload.password)
    return UserOut(username=user.username)


@router.post(
    "/token",
    response_model=TokenOut,
    summary="Emitir access token",
    description="Valida usuario/contraseña y devuelve un JWT para `Authorization: Bearer`.",
)
def token(payload: TokenPayload, users: UserRepository = Depends(get_user_repository)) -> TokenOut:
    try:
        access_token = service.issue_token(users, username=payload.username, password=payload.password)
    except service.AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": WWW_AUTHENTICATE},
        )
    return TokenOut(access_token=access_token, expires_in=service.token_ttl_seconds())


@router.get("/me", response_model=UserOut, summary="Usuario autenticado")
def me(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut(username=user.username)
