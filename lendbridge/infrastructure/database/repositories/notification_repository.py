from __future__ import annotations

from lendbridge.infrastructure.database.repositories.base import SupabaseRepository


class NotificationRepository(SupabaseRepository):
    def create(self, user_id: str, kind: str, title: str, message: str, link: str) -> None:
        """Queue an in-app notification through the ``create_notification`` function."""
        self._run(
            "Notification create",
            lambda: self.client.rpc(
                "create_notification",
                {
                    "p_user_id": user_id,
                    "p_type": kind,
                    "p_title": title,
                    "p_message": message,
                    "p_link": link,
                },
            ).execute(),
        )
