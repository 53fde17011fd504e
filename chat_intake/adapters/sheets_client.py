from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import requests

from chat_intake.errors import UpstreamError


@dataclass
class SheetsWebhookClient:
    """Forwards lead records to a spreadsheet web-app webhook."""

    url: str
    token: str = ""
    timeout: float = 10.0

    def save(self, record: Dict[str, Any]) -> Dict[str, Any]:
        if not self.url:
            raise UpstreamError("Sheets webhook configured without URL")
        payload = {"token": self.token, **record}
        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise UpstreamError(f"Sheets webhook unreachable: {exc}") from exc
        if not response.ok:
            raise UpstreamError(
                f"Sheets webhook rejected lead (status {response.status_code}): {response.text}"
            )
        return {"status": response.status_code}
