"""Service Result — the success value every service returns to its route.

Invariants:
    - Failures are never represented here; services raise CogniCareError instead
    - to_body() always starts with {"success": true, "message": ...}
    - A mapping payload is merged into the body unless nest=True; anything else goes under "data"
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ServiceResult:
    message: str
    data: Any = None
    status_code: int = 200
    nest: bool = False

    def to_body(self) -> dict:
        body: dict[str, Any] = {"success": True, "message": self.message}
        if self.data is None:
            return body
        if isinstance(self.data, dict) and not self.nest:
            body.update(self.data)
        else:
            body["data"] = self.data
        return body
