from abc import ABC, abstractmethod


class INotifier(ABC):
    """Out-of-band delivery of password reset links"""

    @abstractmethod
    async def send_password_reset(self, to_email: str, token: str) -> bool:
        """Send the reset link for token. Returns True on success, False on failure"""
        pass
