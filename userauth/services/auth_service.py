"""Authentication flow: sign-up, login, OTP verification and admin user management"""
from typing import Optional
import logging

from userauth.core.security import hash_password, verify_password
from userauth.errors.exceptions import (
    ConflictException,
    InvalidCredentialsException,
    InvalidEmailException,
    InvalidOTPException,
    NotFoundException,
    OTPDeliveryException,
)
from userauth.models.user import User, UserRole
from userauth.repositories.user_repository import DuplicateUserError, UserRepository
from userauth.schemas.auth_schemas import TokenClaims
from userauth.services.otp_store import OtpStore, generate_otp
from userauth.services.token_service import TokenService
from userauth.utils.email import NotificationError, Notifier, send_otp_email
from userauth.utils.logger import log_auth_event

logger = logging.getLogger(__name__)

SIGN_UP_MESSAGE = "User registered successfully. OTP sent to email for verification."
ADMIN_ADD_USER_MESSAGE = "User added successfully by admin."
DELETE_USER_MESSAGE = "User deleted successfully"
RESEND_OTP_MESSAGE = "A new OTP has been sent to your email."


class AuthFlow:
    """
    Orchestrates the authentication use cases.

    Holds no user state of its own; users live in the repository and
    challenges in the OTP store.
    """

    def __init__(
        self,
        users: UserRepository,
        otp_store: OtpStore,
        notifier: Notifier,
        tokens: TokenService
    ):
        self.users = users
        self.otp_store = otp_store
        self.notifier = notifier
        self.tokens = tokens

    # ── helpers ───────────────────────────────────────────────────────────────

    def _create_user(
        self,
        username: str,
        password: str,
        mobile: Optional[str],
        email: str,
        role: UserRole
    ) -> User:
        if self.users.find_by_username(username):
            raise ConflictException(detail="Username already exists")
        try:
            return self.users.insert(
                username=username,
                password=hash_password(password),
                mobile=mobile,
                email=email,
                role=role
            )
        except DuplicateUserError:
            raise ConflictException(detail="Username already exists")

    def _issue_token(self, user: User) -> str:
        return self.tokens.issue(
            TokenClaims(user_id=user.id, username=user.username, role=user.role)
        )

    def _deliver_otp(self, email: str, username: Optional[str] = None) -> None:
        otp = generate_otp()
        self.otp_store.put(email, otp)
        try:
            send_otp_email(self.notifier, email, otp)
        except NotificationError as exc:
            log_auth_event("OTP DELIVERY", success=False, detail=f"{email}: {exc}", username=username)
            raise OTPDeliveryException()

    # ── public operations ─────────────────────────────────────────────────────

    def sign_up(
        self,
        username: str,
        password: str,
        mobile: Optional[str],
        email: str,
        role: UserRole = UserRole.USER
    ) -> str:
        """
        Register a user and email them a verification OTP.

        The user and the challenge are stored before delivery is attempted,
        so a delivery failure leaves a registered account that can ask for a
        new code via resend_otp().
        """
        try:
            user = self._create_user(username, password, mobile, email, role)
        except ConflictException:
            log_auth_event("SIGN-UP", success=False, detail="username taken", username=username)
            raise

        log_auth_event("SIGN-UP", user_id=user.id, username=user.username)
        self._deliver_otp(email, username=user.username)
        return SIGN_UP_MESSAGE

    def login(self, username: str, password: str) -> str:
        """Return a bearer token for a matching username/password pair"""
        user = self.users.find_by_username(username)
        if user is None or not verify_password(password, user.password):
            log_auth_event("LOGIN", success=False, username=username)
            raise InvalidCredentialsException()

        log_auth_event("LOGIN", user_id=user.id, username=user.username)
        return self._issue_token(user)

    def verify_otp(self, email: str, code: str) -> str:
        """
        Trade a valid OTP for a bearer token.

        The code is only spent once the email resolves to a user; the spend
        itself is the store's atomic compare-and-delete, so a code is accepted
        at most once even under concurrent requests.
        """
        if not self.otp_store.matches(email, code):
            log_auth_event("OTP VERIFY", success=False, detail=email)
            raise InvalidOTPException()

        user = self.users.find_by_email(email)
        if user is None:
            logger.error(f"OTP matched for {email} but no user has that email")
            raise InvalidEmailException()

        # another request may have spent the code since matches()
        if not self.otp_store.consume(email, code):
            log_auth_event("OTP VERIFY", success=False, detail=email)
            raise InvalidOTPException()

        log_auth_event("OTP VERIFY", user_id=user.id, username=user.username)
        return self._issue_token(user)

    def resend_otp(self, email: str) -> str:
        """Replace any outstanding challenge for *email* with a new one"""
        user = self.users.find_by_email(email)
        if user is None:
            raise NotFoundException(detail="No user registered with this email")

        self._deliver_otp(email, username=user.username)
        log_auth_event("OTP RESEND", user_id=user.id, username=user.username)
        return RESEND_OTP_MESSAGE

    def get_profile(self, user_id: int) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundException(detail="User not found")
        return user

    def admin_add_user(
        self,
        username: str,
        password: str,
        mobile: Optional[str],
        email: str,
        role: UserRole = UserRole.USER,
        added_by: Optional[str] = None
    ) -> str:
        """Create a user directly, without OTP verification"""
        user = self._create_user(username, password, mobile, email, role)
        log_auth_event(
            "ADMIN ADD-USER",
            detail=f"{user.username} ({user.role.value}) by {added_by or '-'}",
            user_id=user.id,
            username=user.username
        )
        return ADMIN_ADD_USER_MESSAGE

    def delete_user(self, user_id: int, deleted_by: Optional[str] = None) -> str:
        if not self.users.delete_by_id(user_id):
            raise NotFoundException(detail="User not found")

        log_auth_event("ADMIN DELETE-USER", detail=f"by {deleted_by or '-'}", user_id=user_id)
        return DELETE_USER_MESSAGE
