"""Credentials assigned to well-known names in code or config."""

from repoguard.rules.models import Rule

# name, then `=` or `:`, then a single- or double-quoted value
_ASSIGN = r"""\s*[:=]\s*["']"""

PASSWORD = Rule(
    id="PASSWORD",
    label="Password",
    description="Password assigned a quoted literal of 8 or more characters.",
    severity="high",
    pattern=r"(?:password|passwd|pwd)" + _ASSIGN + r"""[^"']{8,}["']""",
)

API_KEY = Rule(
    id="API_KEY",
    label="API key",
    description="API key assigned a quoted literal of 16 or more characters.",
    severity="high",
    pattern=r"api[_-]?key" + _ASSIGN + r"""[^"']{16,}["']""",
)

SECRET = Rule(
    id="SECRET",
    label="Secret",
    description="Secret or client secret assigned a quoted literal of 8 or more characters.",
    severity="high",
    pattern=r"secret(?:[_-]?key)?" + _ASSIGN + r"""[^"']{8,}["']""",
)

TOKEN = Rule(
    id="TOKEN",
    label="Token",
    description="Access or auth token assigned a quoted literal of 16 or more characters.",
    severity="medium",
    pattern=r"token" + _ASSIGN + r"""[^"']{16,}["']""",
)

ALL_CREDENTIAL_RULES = [PASSWORD, API_KEY, SECRET, TOKEN]
