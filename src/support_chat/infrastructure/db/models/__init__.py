"""Import all models so Base.metadata knows every table."""
from support_chat.infrastructure.db.models.attachment import AttachmentModel
from support_chat.infrastructure.db.models.message import MessageModel
from support_chat.infrastructure.db.models.owner import OwnerModel

__all__ = [
    "AttachmentModel",
    "MessageModel",
    "OwnerModel",
]
