# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, Request, Response

from storefront.api.deps import get_auth_service, get_current_user
from storefront.data.models.user import UserModel
from storefront.domain.schemas import LoginIn, RegisterIn, UserOut
from storefront.services.auth_service import AuthService
from storefront.utils.settings import AUTH_COOKIE_NAME, AUTH_COOKIE_SECURE, JWT_TTL_SECONDS

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=201)
def register(payload: RegisterIn, auth: AuthService = Depends(get_auth_service)):
    return auth.register(payload)


@router.post("/login", response_model=UserOut)
def login(payload: LoginIn, response: Response, auth: AuthService = Depends(get_auth_service)):
    user, token = auth.login(payload.email, payload.password)
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=JWT_TTL_SECONDS,
        httponly=True,
        secure=AUTH_COOKIE_SECURE,
        samesite="lax",
    )
    return user


@router.post("/logout")
def logout(request: Request, response: Response, auth: AuthService = Depends(get_auth_service)):
    auth.logout(request.cookies.get(AUTH_COOKIE_NAME))
    response.delete_cookie(key=AUTH_COOKIE_NAME, httponly=True, secure=AUTH_COOKIE_SECURE, samesite="lax")
    return {"success": True}


@router.get("/me", response_model=UserOut)
def me(user: UserModel = Depends(get_current_user)):
    return user
