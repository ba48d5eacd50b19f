from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    @abstractmethod
    async def presign_upload(
        self,
        key: str,
        content_type: str,
        metadata: dict[str, str],
        expires_in: int,
    ) -> str:
        """Return a URL the client can PUT the object to until it expires."""
