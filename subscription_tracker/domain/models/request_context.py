from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Dict, Optional

REQUEST_ID_HEADER = "X-Request-ID"
TRACE_ID_HEADER = "X-Trace-ID"


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Correlation identifiers of the request that triggered a call."""

    request_id: str
    trace_id: str

    @classmethod
    def from_headers(cls, request_id: Optional[str], trace_id: Optional[str]) -> "RequestContext":
        return cls(
            request_id=request_id or str(uuid.uuid4()),
            trace_id=trace_id or str(uuid.uuid4()),
        )

    def log_extra(self) -> Dict[str, str]:
        return {"request_id": self.request_id, "trace_id": self.trace_id}
