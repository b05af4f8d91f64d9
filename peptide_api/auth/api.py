# -*- coding: utf-8 -*-
"""Auth — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from ..config import settings
from .models import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserPublic,
)
from .security import (
    TOKEN_COOKIE_NAME,
    create_access_token,
    get_current_user,
    hash_password,
    password_needs_rehash,
    verify_password,
)
from .storage import create_user, delete_user, get_user_by_email, set_password_hash, update_user

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _user_public(row: dict) -> UserPublic:
    return UserPublic(
        id=row["id"],
        email=row["email"],
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


def _set_auth_cookie(resp: Response, token: str) -> None:
    max_age = int(settings.token_ttl_days) * 24 * 60 * 60
    resp.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        httponly=True,
        secure=bool(settings.cookie_secure),
        samesite="lax",
        max_age=max_age,
        path="/",
    )


@router.post("/register", response_model=AuthResponse, summary="Register a new user")
def register(request: RegisterRequest, response: Response):
    if get_user_by_email(request.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = create_user(
        email=request.email,
        password_hash=hash_password(request.password),
        first_name=request.first_name,
        last_name=request.last_name,
    )
    token = create_access_token(user_id=user["id"], email=user["email"])
    _set_auth_cookie(response, token)
    return AuthResponse(user=_user_public(user), token=token)


@router.post("/login", response_model=AuthResponse, summary="Login")
def login(request: LoginRequest, response: Response):
    user = get_user_by_email(request.email)
    if not user or not verify_password(request.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if password_needs_rehash(user["password_hash"]):
        set_password_hash(user["id"], hash_password(request.password))

    token = create_access_token(user_id=user["id"], email=user["email"])
    _set_auth_cookie(response, token)
    return AuthResponse(user=_user_public(user), token=token)


@router.post("/logout", summary="Logout")
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    return {"status": "ok"}


@router.get("/me", response_model=UserPublic, summary="Get current user")
def me(user: dict = Depends(get_current_user)):
    return _user_public(user)


@router.patch("/me", response_model=UserPublic, summary="Update profile")
def update_me(request: UpdateProfileRequest, user: dict = Depends(get_current_user)):
    updated = update_user(
        user["id"],
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    return _user_public(updated)


@router.post("/change-password", summary="Change password")
def change_password(request: ChangePasswordRequest, user: dict = Depends(get_current_user)):
    if not verify_password(request.current_password, user["password_hash"]):
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    set_password_hash(user["id"], hash_password(request.new_password))
    return {"status": "ok", "message": "Password changed successfully"}


@router.delete("/me", summary="Delete account")
def delete_me(response: Response, user: dict = Depends(get_current_user)):
    delete_user(user["id"])
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    return {"status": "ok", "message": "User account deleted successfully"}
