"""Private keys and provider-issued key formats."""

from repoguard.rules.models import Rule

PRIVATE_KEY = Rule(
    id="PRIVATE_KEY",
    label="Private key",
    description="PEM private key header (RSA, EC, DSA, OpenSSH or PKCS#8).",
    severity="critical",
    pattern=r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----",
)

AWS_ACCESS_KEY = Rule(
    id="AWS_ACCESS_KEY",
    label="AWS access key",
    description="AWS access key ID (AKIA followed by 16 characters).",
    severity="critical",
    pattern=r"\bAKIA[0-9A-Z]{16}\b",
)

GITHUB_TOKEN = Rule(
    id="GITHUB_TOKEN",
    label="GitHub token",
    description="GitHub personal access or app token (ghp_, gho_, ghu_, ghs_, ghr_).",
    severity="critical",
    pattern=r"\bgh[pousr]_[A-Za-z0-9]{36,}\b",
)

ALL_KEY_RULES = [PRIVATE_KEY, AWS_ACCESS_KEY, GITHUB_TOKEN]
