from abc import ABC, abstractmethod


class NotificationSender(ABC):
    @abstractmethod
    async def send_email(self, recipient: str, subject: str, body: str, attributes: dict) -> None: ...

    @abstractmethod
    async def send_sms(self, phone_number: str, body: str, attributes: dict) -> None: ...
