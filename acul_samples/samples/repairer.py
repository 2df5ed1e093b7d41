"""
Textual repairs for known breakages in upstream ACUL examples.

Every repair is guarded by a check on the text and produces output on which
its own guard no longer fires, so running the whole list twice gives the same
result as running it once. A repair whose guard does not match is skipped;
repairs never raise.

Screen-specific repairs run before the generic ones.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from acul_samples.samples.extractor import Sample
from acul_samples.screens import to_component_name

logger = logging.getLogger(__name__)

RepairFn = Callable[[str, str], str]


@dataclass(frozen=True)
class Repair:
    name: str
    apply: RepairFn
    # None means the repair applies to every screen
    screen_id: str | None = None

    def applies_to(self, screen_id: str) -> bool:
        return self.screen_id is None or self.screen_id == screen_id


# =============================================================================
# Generic repairs
# =============================================================================

_REACT_IMPORT_RE = re.compile(r"""from\s+['"]react['"]""")
_REACT_NAMED_IMPORT_RE = re.compile(r"""import React, \{([^}]+)\} from (['"])react\2""")
_REACT_DEFAULT_IMPORT_RE = re.compile(r"""import React from (['"])react\1""")

# Rename only plain calls; the optional-chained form belongs to the fallback below
_ACTIVE_IDENTIFIERS_RE = re.compile(r"getActiveIdentifiers(?!\?\.)")

LOGIN_IDENTIFIERS_FALLBACK = (
    "(loginManager.getLoginIdentifiers?.() ?? loginManager.getActiveIdentifiers?.() ?? ['email'])"
)
ENABLED_IDENTIFIERS_FALLBACK = (
    "(signupManager.getEnabledIdentifiers?.() ?? "
    "[{ type: 'email', required: true }, "
    "{ type: 'username', required: false }, "
    "{ type: 'phone', required: false }])"
)


def _is_complete_module(code: str) -> bool:
    return "export default" in code or "export const" in code


def wrap_as_component(code: str, screen_id: str) -> str:
    """Turn a bare snippet into a module exporting `<Name>Screen` by default."""
    if _is_complete_module(code):
        return code

    hooks = [hook for hook in ("useState", "useMemo") if hook in code]
    if _REACT_IMPORT_RE.search(code):
        header = ""
    elif hooks:
        header = f"import React, {{ {', '.join(hooks)} }} from 'react';\n\n"
    else:
        header = "import React from 'react';\n\n"

    return f"{header}{code}\n\nexport default {to_component_name(screen_id)}Screen;\n"


def ensure_use_memo_import(code: str, screen_id: str) -> str:
    """Add useMemo to the React import when the sample uses it without importing it."""
    if "useMemo" not in code:
        return code

    named = _REACT_NAMED_IMPORT_RE.search(code)
    if named:
        hooks = [hook.strip() for hook in named.group(1).split(",") if hook.strip()]
        if "useMemo" in hooks:
            return code
        hooks.append("useMemo")
        quote = named.group(2)
        replacement = f"import React, {{ {', '.join(hooks)} }} from {quote}react{quote}"
        return code[: named.start()] + replacement + code[named.end() :]

    default = _REACT_DEFAULT_IMPORT_RE.search(code)
    if default:
        quote = default.group(1)
        replacement = f"import React, {{ useMemo }} from {quote}react{quote}"
        return code[: default.start()] + replacement + code[default.end() :]

    return code


def rename_active_identifiers(code: str, screen_id: str) -> str:
    """getActiveIdentifiers was renamed to getLoginIdentifiers in the SDK."""
    if not _ACTIVE_IDENTIFIERS_RE.search(code):
        return code
    return _ACTIVE_IDENTIFIERS_RE.sub("getLoginIdentifiers", code)


def login_identifiers_fallback(code: str, screen_id: str) -> str:
    """Tolerate SDK builds that expose only one of the identifier getters."""
    target = "loginManager.getLoginIdentifiers()"
    if target not in code:
        return code
    return code.replace(target, LOGIN_IDENTIFIERS_FALLBACK)


def enabled_identifiers_fallback(code: str, screen_id: str) -> str:
    """Show every signup field when the SDK has no getEnabledIdentifiers."""
    target = "signupManager.getEnabledIdentifiers()"
    if target not in code:
        return code
    return code.replace(target, ENABLED_IDENTIFIERS_FALLBACK)


# =============================================================================
# Screen-specific repairs
# =============================================================================


def fix_captcha_import_path(code: str, screen_id: str) -> str:
    typo = "@auth0/auth0-acul-js/intersitial-captcha"
    if typo not in code:
        return code
    return code.replace(typo, "@auth0/auth0-acul-js/interstitial-captcha")


def fix_login_id_alternate_connections(code: str, screen_id: str) -> str:
    broken = "const selectedConnection = alternateConnections[0];"
    if broken not in code:
        return code
    return code.replace(
        broken,
        "const selectedConnection = loginIdManager.transaction.alternateConnections[0];",
        1,
    )


def fix_double_i_import(code: str, screen_id: str) -> str:
    if not code.startswith("iimport"):
        return code
    return code[1:]


UTILITY_PLACEHOLDER_TEMPLATE = """import React from 'react';

// Utility function example from @auth0/auth0-acul-js, not a screen component.
// See https://auth0.github.io/universal-login for usage.

const {name}Screen: React.FC = () => {{
  return (
    <div className="min-h-screen bg-gray-100 flex items-center justify-center p-8">
      <div className="bg-white rounded-lg shadow-lg p-8 max-w-2xl">
        <h1 className="text-2xl font-bold mb-4">Utility Function Example</h1>
        <p className="text-gray-600 mb-4">
          This file demonstrates a utility function from @auth0/auth0-acul-js.
          It is not meant to be deployed as a screen component.
        </p>
      </div>
    </div>
  );
}};

export default {name}Screen;
"""


def replace_with_utility_placeholder(code: str, screen_id: str) -> str:
    return UTILITY_PLACEHOLDER_TEMPLATE.format(name=to_component_name(screen_id))


UTILITY_EXAMPLES = ("get-current-screen-options", "get-current-theme-options")

REPAIRS: tuple[Repair, ...] = (
    Repair("captcha-import-path", fix_captcha_import_path, "interstitial-captcha"),
    Repair("login-id-alternate-connections", fix_login_id_alternate_connections, "login-id"),
    Repair("double-i-import", fix_double_i_import, "mfa-push-welcome"),
    *(
        Repair("utility-placeholder", replace_with_utility_placeholder, screen_id)
        for screen_id in UTILITY_EXAMPLES
    ),
    Repair("wrap-component", wrap_as_component),
    Repair("use-memo-import", ensure_use_memo_import),
    Repair("rename-active-identifiers", rename_active_identifiers),
    Repair("login-identifiers-fallback", login_identifiers_fallback),
    Repair("enabled-identifiers-fallback", enabled_identifiers_fallback),
)


def apply_repairs(code: str, screen_id: str) -> tuple[str, list[str]]:
    """
    Run every applicable repair in order.

    Returns:
        (repaired code, names of the repairs that changed the text)
    """
    applied: list[str] = []
    for repair in REPAIRS:
        if not repair.applies_to(screen_id):
            continue
        updated = repair.apply(code, screen_id)
        if updated != code:
            applied.append(repair.name)
            code = updated
    return code, applied


def repair_sample(sample: Sample | str, screen_id: str) -> str:
    """
    Finalise extracted sample source for a screen.

    Args:
        sample: Extracted sample (or its raw code)
        screen_id: Screen identifier the sample belongs to

    Returns:
        The repaired source text
    """
    code = sample.code if isinstance(sample, Sample) else sample
    repaired, applied = apply_repairs(code, screen_id)
    if applied:
        logger.debug("Repaired %s: %s", screen_id, ", ".join(applied))
    return repaired
