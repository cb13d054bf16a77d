from vendorcomply.domain.notification import NotificationRule
from vendorcomply.repositories.base import BaseRepository


class NotificationRuleRepository(BaseRepository[NotificationRule]):
    model = NotificationRule
