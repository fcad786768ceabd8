from typing import Any, Mapping, Optional
from dataclasses import dataclass, asdict

FIELDS = ("name", "email", "comment")

FIELD_LABELS = {
    "name": "Name",
    "email": "E-mail",
    "comment": "Comment",
}


# ========== Config & Models ==========
@dataclass
class Config:
    endpoint: str = ""
    timeout: float = 30
    verify_tls: bool = True
    debug: bool = False
    # seconds a success / error banner stays up before reverting to idle
    reset_delay: float = 4.0
    simulated_delay: float = 1.0

    @classmethod
    def from_options(cls, endpoint: Optional[str], timeout: float, insecure: bool, debug: bool) -> "Config":
        return cls(
            endpoint=(endpoint or "").strip(),
            timeout=timeout,
            verify_tls=not insecure,
            debug=debug,
        )


@dataclass
class FormData:
    name: str = ""
    email: str = ""
    comment: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FormData":
        return cls(**{field: data.get(field) or "" for field in FIELDS})

    def as_payload(self) -> dict:
        return asdict(self)


@dataclass
class SubmitResult:
    ok: bool
    status_code: Optional[int]
    text: str
    error: Optional[str] = None
