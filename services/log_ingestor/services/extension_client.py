import logging
from typing import List, Optional

import httpx

from ..core.exceptions import ExtensionApiError
from ..models.extension import EVENT_INVOKE, EVENT_SHUTDOWN, ExtensionEvent

logger = logging.getLogger("log_ingestor.extension")

EXTENSION_API_VERSION = "2020-01-01"


class ExtensionClient:
    """Wrapper for the Lambda Extensions API (register / event/next / exit/error)"""

    def __init__(self, http_client: httpx.AsyncClient, runtime_api: str, extension_name: str):
        self.client = http_client
        self.base_url = f"http://{runtime_api}/{EXTENSION_API_VERSION}/extension"
        self.extension_name = extension_name
        self.extension_id = None

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        # exit/error answers 202; register and event/next answer 200.
        if not response.is_success:
            raise ExtensionApiError(response.status_code, response.text)

    async def register(self, events: Optional[List[str]] = None) -> str:
        """Register for events and return the extension identifier"""
        response = await self.client.post(
            f"{self.base_url}/register",
            headers={"Lambda-Extension-Name": self.extension_name},
            json={"events": events or [EVENT_INVOKE, EVENT_SHUTDOWN]},
        )
        self._raise_for_status(response)
        self.extension_id = response.headers.get("Lambda-Extension-Identifier")
        if not self.extension_id:
            raise ExtensionApiError(response.status_code, "missing Lambda-Extension-Identifier")
        return self.extension_id

    async def next_event(self) -> ExtensionEvent:
        """Block until the next event. The long poll has no client-side timeout."""
        response = await self.client.get(
            f"{self.base_url}/event/next",
            headers={"Lambda-Extension-Identifier": self.extension_id},
            timeout=None,
        )
        self._raise_for_status(response)
        return ExtensionEvent.model_validate(response.json())

    async def report_exit_error(self, error_type: str) -> None:
        """Tell Lambda why the extension is about to exit (best effort)."""
        if not self.extension_id:
            return
        try:
            response = await self.client.post(
                f"{self.base_url}/exit/error",
                headers={
                    "Lambda-Extension-Identifier": self.extension_id,
                    "Lambda-Extension-Function-Error-Type": error_type,
                },
                json={"errorMessage": error_type, "errorType": error_type},
            )
            self._raise_for_status(response)
        except (httpx.HTTPError, ExtensionApiError) as e:
            logger.warning(f"Failed to report exit error: {e}")
