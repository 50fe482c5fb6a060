from __future__ import annotations


class ReferralsReportError(Exception):
    pass


class CodeTooLongError(ReferralsReportError, ValueError):
    def __init__(self, code: str, *, max_length: int) -> None:
        super().__init__(f"referral code is too long: {len(code)} characters, max {max_length}")
        self.code = code
        self.max_length = max_length


class UnsupportedChainError(ReferralsReportError):
    def __init__(self, chain_id: int) -> None:
        super().__init__(f"unsupported chain {chain_id}")
        self.chain_id = chain_id


class RetrievalError(ReferralsReportError):
    def __init__(self, message: str, *, chain_id: int | None = None) -> None:
        super().__init__(message)
        self.chain_id = chain_id
