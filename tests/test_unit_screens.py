"""
Unit tests for the screen id -> prompt/screen mapping.

Tests cover:
- Recorded pairs returned exactly
- Identity fallback for unknown ids
- Table immutability
- PascalCase component names
"""

import pytest

from acul_samples.screens import (
    PROMPT_SCREEN_MAP,
    PromptScreen,
    get_prompt_and_screen,
    to_component_name,
)


class TestGetPromptAndScreen:
    @pytest.mark.parametrize(
        ("screen_id", "prompt"),
        [
            ("mfa-otp-challenge", "mfa-otp"),
            ("mfa-login-options", "mfa"),
            ("organization-picker", "organizations"),
            ("device-code-confirmation", "device-flow"),
            ("email-verification-result", "email-verification"),
            ("redeem-ticket", "common"),
            ("logout-complete", "logout"),
            ("reset-password-request", "reset-password"),
            ("interstitial-captcha", "captcha"),
            ("accept-invitation", "invitation"),
            ("brute-force-protection-unblock", "login"),
            ("login-id", "login-id"),
        ],
    )
    def test_known_screens(self, screen_id, prompt):
        """Known screens resolve to their owning prompt; screen name is unchanged."""
        assert get_prompt_and_screen(screen_id) == PromptScreen(prompt, screen_id)

    def test_every_table_entry_is_returned_exactly(self):
        for screen_id, pair in PROMPT_SCREEN_MAP.items():
            assert get_prompt_and_screen(screen_id) is pair
            assert pair.screen == screen_id

    @pytest.mark.parametrize("screen_id", ["my-custom-screen", "", "LOGIN", "get-current-theme-options"])
    def test_unknown_screens_fall_back_to_identity(self, screen_id):
        assert get_prompt_and_screen(screen_id) == PromptScreen(screen_id, screen_id)

    def test_mapping_is_stable_across_calls(self):
        first = get_prompt_and_screen("mfa-sms-list")
        second = get_prompt_and_screen("mfa-sms-list")
        assert first == second == PromptScreen("mfa-sms", "mfa-sms-list")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            PROMPT_SCREEN_MAP["login"] = PromptScreen("x", "y")  # type: ignore[index]


class TestComponentName:
    def test_kebab_to_pascal(self):
        assert to_component_name("login-id") == "LoginId"
        assert to_component_name("mfa-otp-enrollment-code") == "MfaOtpEnrollmentCode"

    def test_single_word(self):
        assert to_component_name("consent") == "Consent"
