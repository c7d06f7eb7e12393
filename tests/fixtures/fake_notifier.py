from typing import List, Tuple

from src.app.services.notifier import INotifier


class CapturingNotifier(INotifier):
    """Records reset links instead of sending them"""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent: List[Tuple[str, str]] = []

    async def send_password_reset(self, to_email: str, token: str) -> bool:
        self.sent.append((to_email, token))
        return self.succeed

    @property
    def last_token(self) -> str:
        return self.sent[-1][1]
