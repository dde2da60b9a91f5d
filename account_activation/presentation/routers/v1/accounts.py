from typing import Annotated, Callable

from fastapi import APIRouter, Depends, HTTPException, Security, status
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)

from account_activation.application.activation_workflow import ActivationWorkflow
from account_activation.application.login_account import login_account
from account_activation.application.register_account import register_account
from account_activation.application.resend_activation import resend_activation
from account_activation.domain.errors import (
    AccountAlreadyExists,
    AccountNotActive,
    InvalidAccount,
    InvalidCredentials,
    TokenExpired,
    TokenNotFound,
)
from account_activation.domain.ports.session_store import SessionStorePort
from account_activation.domain.ports.unit_of_work import UnitOfWorkPort
from account_activation.presentation.dependencies import (
    get_activation_workflow,
    get_hash_password,
    get_sessions,
    get_uow,
    get_verify_password,
)
from account_activation.schemas.requests import (
    AccountActivateIn,
    AccountCreateIn,
    ActivationResendIn,
)
from account_activation.schemas.responses import (
    AcceptedOut,
    AccountOut,
    OkOut,
    SessionOut,
)

router = APIRouter(prefix="/accounts", tags=["Accounts"])
security = HTTPBasic()
bearer_scheme = HTTPBearer()


@router.post(
    "/",
    status_code=202,
    response_model=AcceptedOut,
)
async def post_create_account(
    body: AccountCreateIn,
    workflow: Annotated[ActivationWorkflow, Depends(get_activation_workflow)],
    hash_password: Annotated[Callable[..., str], Depends(get_hash_password)],
):
    try:
        await register_account(
            workflow=workflow,
            email=body.email,
            password=body.password,
            hash_password=hash_password,
        )
    except AccountAlreadyExists:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="email already registered"
        )
    except InvalidAccount as e:
        raise HTTPException(status_code=422, detail=str(e))
    return AcceptedOut()


@router.post("/activate", response_model=OkOut)
async def post_activate_account(
    payload: AccountActivateIn,
    workflow: Annotated[ActivationWorkflow, Depends(get_activation_workflow)],
):
    try:
        await workflow.activate(payload.token)
    except TokenNotFound:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="invalid activation token"
        )
    except TokenExpired:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="activation token expired"
        )
    return OkOut()


@router.post("/activation/resend", status_code=202, response_model=AcceptedOut)
async def post_resend_activation(
    payload: ActivationResendIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    workflow: Annotated[ActivationWorkflow, Depends(get_activation_workflow)],
):
    await resend_activation(uow=uow, workflow=workflow, email=payload.email)
    return AcceptedOut()


@router.post("/login", response_model=SessionOut)
async def post_login(
    creds: Annotated[HTTPBasicCredentials, Depends(security)],
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    workflow: Annotated[ActivationWorkflow, Depends(get_activation_workflow)],
    verify_password: Annotated[Callable[[str, str], bool], Depends(get_verify_password)],
    sessions: Annotated[SessionStorePort, Depends(get_sessions)],
):
    try:
        token = await login_account(
            uow=uow,
            workflow=workflow,
            sessions=sessions,
            email=creds.username,
            password=creds.password,
            verify_password=verify_password,
        )
    except AccountNotActive:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="account not activated"
        )
    except InvalidCredentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid credentials"
        )
    return SessionOut(token=token)


@router.get("/me", response_model=AccountOut)
async def get_me(
    auth: Annotated[HTTPAuthorizationCredentials, Security(bearer_scheme)],
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    sessions: Annotated[SessionStorePort, Depends(get_sessions)],
):
    account_id = await sessions.get(auth.credentials)
    if not account_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid or expired token"
        )

    async with uow as tx:
        account = await tx.accounts.get_by_id(account_id)
        # no state change; no commit needed
    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="unknown account"
        )
    state = account.activation_state.value if account.activation_state else None
    return AccountOut(id=account.id, email=account.email, activation_state=state)
