"""FastAPI endpoints for the Identity domain — registration and sessions."""

from fastapi import APIRouter, Depends, Response
from protean.utils.globals import current_domain

from identity.api.dependencies import get_principal, session_token
from identity.api.schemas import (
    PrincipalSchema,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    SignInRequest,
)
from identity.principal import Principal, resolve_principal
from identity.session.issuance import SignIn, SignOut
from identity.session.session import SESSION_COOKIE_NAME, SESSION_LIFETIME
from identity.user.registration import RegisterUser
from identity.user.user import User
from shared.schemas import StatusResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=RegisterResponse)
async def register(body: RegisterRequest) -> RegisterResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return RegisterResponse(
        user=PrincipalSchema(id=str(user.id), email=user.email, name=user.name, role=user.role),
    )


@router.post("/session", response_model=SessionResponse)
async def sign_in(body: SignInRequest, response: Response) -> SessionResponse:
    token = current_domain.process(SignIn(email=body.email, password=body.password), asynchronous=False)
    principal = resolve_principal(token)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=int(SESSION_LIFETIME.total_seconds()),
        httponly=True,
        samesite="lax",
    )
    return SessionResponse(user=PrincipalSchema(**principal.to_dict()), token=token)


@router.get("/session", response_model=SessionResponse)
async def current_session(principal: Principal = Depends(get_principal)) -> SessionResponse:
    return SessionResponse(user=PrincipalSchema(**principal.to_dict()))


@router.delete("/session", response_model=StatusResponse)
async def sign_out(response: Response, token: str | None = Depends(session_token)) -> StatusResponse:
    if token:
        current_domain.process(SignOut(token=token), asynchronous=False)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return StatusResponse()
