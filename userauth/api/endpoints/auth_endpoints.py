"""Public authentication endpoints and the caller's profile"""
from fastapi import APIRouter, Depends, status

from userauth.core.dependencies import get_auth_flow
from userauth.middleware.auth import require_authenticated
from userauth.schemas.auth_schemas import (
    UserCreate,
    LoginRequest,
    OTPVerifyRequest,
    ResendOTPRequest,
    MessageResponse,
    TokenResponse,
    UserProfile,
    TokenClaims,
)
from userauth.services.auth_service import AuthFlow

router = APIRouter()


@router.get("/home")
async def home():
    """Liveness check"""
    return "Hello Welcome To Home"


@router.post("/sign-up", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def sign_up(user_data: UserCreate, flow: AuthFlow = Depends(get_auth_flow)):
    """
    ## Register a new user account

    **Role:** Public — no authentication required.

    Creates the account and emails a 6-digit OTP to `email`. No token is
    returned here; exchange the OTP at **POST /otp-verification**, or log in
    with username and password.

    ### Errors
    - HTTP 409 → "Username already exists".
    - HTTP 502 → account created but the OTP email could not be delivered;
      call **POST /resend-otp**.
    """
    message = flow.sign_up(
        username=user_data.username,
        password=user_data.password,
        mobile=user_data.mobile,
        email=user_data.email,
        role=user_data.role,
    )
    return MessageResponse(message=message)


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, flow: AuthFlow = Depends(get_auth_flow)):
    """
    ## Login with username and password

    **Role:** Public — no authentication required.

    Returns `{ "token": "<JWT>", "token_type": "bearer" }`. Send it on later
    requests as `Authorization: Bearer <token>`.

    - HTTP 401 → "Invalid username or password".
    """
    return TokenResponse(token=flow.login(body.username, body.password))


@router.post("/otp-verification", response_model=TokenResponse)
def verify_otp(body: OTPVerifyRequest, flow: AuthFlow = Depends(get_auth_flow)):
    """
    ## Exchange the emailed OTP for a token

    **Role:** Public — no authentication required.

    Each code is accepted once.

    - HTTP 400 → "Invalid OTP" (wrong, expired or already used).
    - HTTP 404 → "Invalid email".
    """
    return TokenResponse(token=flow.verify_otp(body.email, body.otp))


@router.post("/resend-otp", response_model=MessageResponse)
def resend_otp(body: ResendOTPRequest, flow: AuthFlow = Depends(get_auth_flow)):
    """
    ## Send a fresh OTP

    Invalidates any code previously sent to the same email.
    """
    return MessageResponse(message=flow.resend_otp(body.email))


@router.get("/profile", response_model=UserProfile)
def profile(
    claims: TokenClaims = Depends(require_authenticated),
    flow: AuthFlow = Depends(get_auth_flow)
):
    """
    ## Get the authenticated user's profile

    **Auth:** `Authorization: Bearer <token>` header required.

    Password is never included.
    """
    return flow.get_profile(claims.user_id)
