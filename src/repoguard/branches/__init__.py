"""Branch naming convention checks."""

from repoguard.branches.validator import BranchCheck, is_exempt, validate_branch_name

__all__ = ["BranchCheck", "is_exempt", "validate_branch_name"]
