from urllib.parse import urlencode

import structlog

from cashflow.uploads.storage import ObjectStorage

logger = structlog.get_logger()


class LogObjectStorage(ObjectStorage):
    """Issues unsigned URLs under a base URL and logs them.

    Stands in for a real bucket in development; nothing is stored.
    """

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")

    async def presign_upload(
        self,
        key: str,
        content_type: str,
        metadata: dict[str, str],
        expires_in: int,
    ) -> str:
        url = f"{self._base_url}/{key}?{urlencode({'content_type': content_type, 'expires_in': expires_in})}"
        logger.info("upload_url_issued", key=key, content_type=content_type, expires_in=expires_in)
        return url
