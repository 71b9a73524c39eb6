"""
Verification domain module
"""
from .models import CheckStatus, CheckResult, VerifyReport
from .service import Verifier

__all__ = [
    "CheckStatus",
    "CheckResult",
    "VerifyReport",
    "Verifier",
]
