"""Pydantic models for the parts of Telegram updates the bot reads.

Only meal entries (text, captioned label photos) and button presses are
modelled; any other update fields are ignored on parse.
"""

from pydantic import BaseModel, Field


class TelegramUser(BaseModel):
    """Sender of a message or button press."""

    id: int
    is_bot: bool | None = None


class TelegramChat(BaseModel):
    """Chat a reply is sent to."""

    id: int
    type: str


class TelegramPhotoSize(BaseModel):
    """One resolution of a nutrition label photo."""

    file_id: str
    width: int
    height: int
    file_size: int | None = None

    @property
    def area(self) -> int:
        return self.width * self.height


class TelegramMessage(BaseModel):
    """Incoming chat message: a food description, command or label photo."""

    message_id: int
    date: int
    chat: TelegramChat
    from_user: TelegramUser | None = Field(default=None, alias="from")
    text: str | None = None
    caption: str | None = None
    photo: list[TelegramPhotoSize] | None = None

    @property
    def owner_id(self) -> str:
        """Opaque id meals and favorites are stored under.

        Channel posts carry no sender, so the chat id stands in.
        """
        if self.from_user:
            return str(self.from_user.id)
        return str(self.chat.id)

    @property
    def body(self) -> str:
        """Text or photo caption, stripped."""
        return (self.text or self.caption or "").strip()

    def largest_photo(self) -> TelegramPhotoSize | None:
        """Return the highest resolution photo size, if any."""
        if not self.photo:
            return None
        return max(self.photo, key=lambda size: size.area)


class TelegramCallbackQuery(BaseModel):
    """Inline button press carrying an action token."""

    id: str
    from_user: TelegramUser = Field(alias="from")
    message: TelegramMessage | None = None
    data: str | None = None


class TelegramUpdate(BaseModel):
    """Webhook update; the bot handles messages and button presses."""

    update_id: int
    message: TelegramMessage | None = None
    callback_query: TelegramCallbackQuery | None = None

    @property
    def sender_id(self) -> int | None:
        """Telegram id of the user behind the update, if any."""
        if self.callback_query:
            return self.callback_query.from_user.id
        if self.message and self.message.from_user:
            return self.message.from_user.id
        return None
