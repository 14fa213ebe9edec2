"""Message service — direct notes between users."""

from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from devdeck.core.exceptions import ValidationError
from devdeck.models.message import Message
from devdeck.models.user import User


class MessageService:
    """Sends messages and lists a user's conversation history."""

    def __init__(self, db: Session):
        self.db = db

    def send(self, sender_id: int, receiver_id: int, subject: str, content: str) -> Message:
        """Send a message.

        Raises:
            ValidationError: the receiver does not exist or is the sender.
        """
        if sender_id == receiver_id:
            raise ValidationError("You cannot send a message to yourself")
        if self.db.get(User, receiver_id) is None:
            raise ValidationError("Receiver not found")

        message = Message(
            subject=subject,
            content=content,
            sender_id=sender_id,
            receiver_id=receiver_id,
        )
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message

    def inbox(self, user_id: int) -> List[Message]:
        """Messages the user sent or received, newest first."""
        return (
            self.db.query(Message)
            .filter(or_(Message.receiver_id == user_id, Message.sender_id == user_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .all()
        )
