import logging

import httpx

from .config import BaseAppConfig

logger = logging.getLogger(__name__)


class HttpClientFactory:
    """
    HTTP Client Factory for clients talking to the Lambda execution environment.
    """

    def __init__(self, config: BaseAppConfig):
        self.config = config

    def create_async_client(self, **kwargs) -> httpx.AsyncClient:
        """
        Create an httpx.AsyncClient with the configured default timeout.

        Args:
            **kwargs: Additional arguments for httpx.AsyncClient
        """
        # event/next long-polls and passes timeout=None per request.
        kwargs.setdefault("timeout", self.config.EXTENSION_API_TIMEOUT)
        # The Extensions API is local; never route it through HTTP(S)_PROXY.
        kwargs.setdefault("trust_env", False)

        logger.debug(f"Creating async HTTP client (timeout={kwargs['timeout']})")
        return httpx.AsyncClient(**kwargs)
