"""
Screen identifier to Auth0 prompt/screen mapping.

The Management API addresses rendering configuration as
/api/v2/prompts/{prompt}/screen/{screen}/rendering. Sample files are named
after the screen only, so the owning prompt is looked up here. Screens not in
the table are assumed to live under a prompt of the same name.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class PromptScreen:
    prompt: str
    screen: str


def _group(prompt: str, *screens: str) -> dict[str, PromptScreen]:
    return {screen: PromptScreen(prompt, screen) for screen in screens}


PROMPT_SCREEN_MAP: MappingProxyType[str, PromptScreen] = MappingProxyType(
    {
        **_group("captcha", "interstitial-captcha"),
        **_group("common", "redeem-ticket"),
        **_group("consent", "consent"),
        **_group("customized-consent", "customized-consent"),
        **_group(
            "device-flow",
            "device-code-activation",
            "device-code-activation-allowed",
            "device-code-activation-denied",
            "device-code-confirmation",
        ),
        **_group("email-identifier-challenge", "email-identifier-challenge"),
        **_group("email-otp-challenge", "email-otp-challenge"),
        **_group("email-verification", "email-verification-result"),
        **_group("invitation", "accept-invitation"),
        **_group("login", "login"),
        **_group("login-email-verification", "login-email-verification"),
        **_group("login-id", "login-id"),
        **_group("login-password", "login-password"),
        **_group(
            "login-passwordless",
            "login-passwordless-email-code",
            "login-passwordless-sms-otp",
        ),
        **_group("logout", "logout", "logout-aborted", "logout-complete"),
        **_group(
            "mfa",
            "mfa-begin-enroll-options",
            "mfa-detect-browser-capabilities",
            "mfa-enroll-result",
            "mfa-login-options",
        ),
        **_group("mfa-email", "mfa-email-challenge", "mfa-email-list"),
        **_group(
            "mfa-otp",
            "mfa-otp-challenge",
            "mfa-otp-enrollment-code",
            "mfa-otp-enrollment-qr",
        ),
        **_group("mfa-phone", "mfa-phone-challenge", "mfa-phone-enrollment"),
        **_group(
            "mfa-push",
            "mfa-push-challenge-push",
            "mfa-push-enrollment-qr",
            "mfa-push-list",
            "mfa-push-welcome",
        ),
        **_group(
            "mfa-recovery-code",
            "mfa-recovery-code-challenge",
            "mfa-recovery-code-challenge-new-code",
            "mfa-recovery-code-enrollment",
        ),
        **_group(
            "mfa-sms",
            "mfa-country-codes",
            "mfa-sms-challenge",
            "mfa-sms-enrollment",
            "mfa-sms-list",
        ),
        **_group("mfa-voice", "mfa-voice-challenge", "mfa-voice-enrollment"),
        **_group(
            "mfa-webauthn",
            "mfa-webauthn-change-key-nickname",
            "mfa-webauthn-enrollment-success",
            "mfa-webauthn-error",
            "mfa-webauthn-not-available-error",
            "mfa-webauthn-platform-challenge",
            "mfa-webauthn-platform-enrollment",
            "mfa-webauthn-roaming-challenge",
            "mfa-webauthn-roaming-enrollment",
        ),
        **_group("organizations", "organization-picker", "organization-selection"),
        **_group("passkeys", "passkey-enrollment", "passkey-enrollment-local"),
        **_group("phone-identifier-challenge", "phone-identifier-challenge"),
        **_group("phone-identifier-enrollment", "phone-identifier-enrollment"),
        **_group(
            "reset-password",
            "reset-password",
            "reset-password-email",
            "reset-password-error",
            "reset-password-mfa-email-challenge",
            "reset-password-mfa-otp-challenge",
            "reset-password-mfa-phone-challenge",
            "reset-password-mfa-push-challenge-push",
            "reset-password-mfa-recovery-code-challenge",
            "reset-password-mfa-sms-challenge",
            "reset-password-mfa-voice-challenge",
            "reset-password-mfa-webauthn-platform-challenge",
            "reset-password-mfa-webauthn-roaming-challenge",
            "reset-password-request",
            "reset-password-success",
        ),
        **_group("signup", "signup"),
        **_group("signup-id", "signup-id"),
        **_group("signup-password", "signup-password"),
        # Brute force protection screens are served under the login prompt
        **_group(
            "login",
            "brute-force-protection-unblock",
            "brute-force-protection-unblock-success",
            "brute-force-protection-unblock-failure",
        ),
    }
)


def get_prompt_and_screen(screen_id: str) -> PromptScreen:
    """
    Map a screen identifier to its Management API prompt/screen pair.

    Args:
        screen_id: Sample file stem, e.g. "mfa-otp-challenge"

    Returns:
        The recorded pair, or PromptScreen(screen_id, screen_id) when unknown
    """
    return PROMPT_SCREEN_MAP.get(screen_id) or PromptScreen(screen_id, screen_id)


def to_component_name(screen_id: str) -> str:
    """PascalCase component name for a screen id ("login-id" -> "LoginId")."""
    return "".join(part[:1].upper() + part[1:] for part in screen_id.split("-") if part)
