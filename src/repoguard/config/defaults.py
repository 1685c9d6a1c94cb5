"""Starter .repoguard.toml templates."""

DEFAULT_TOML = """\
# repoguard configuration
version = "1.0"

[branches]
prefixes = ["feature", "bugfix", "hotfix", "docs", "test", "chore", "security"]
exempt = ["main", "master", "develop"]

[scan]
fail_on = "high"          # low | medium | high | critical
max_file_size_kb = 512

[output]
format = "terminal"       # terminal | json | sarif
show_summary = true
"""

FULL_TOML = DEFAULT_TOML + """
[rules]
# enable = ["PASSWORD", "PRIVATE_KEY"]   # empty = all enabled
# disable = ["TOKEN"]

[ignore]
# paths = ["docs/*", "tests/fixtures/*"]

[ci]
# annotation_format = "github"   # github | none
# full_redaction = true
# max_findings = 50              # stop scanning after N findings
"""
