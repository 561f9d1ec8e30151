"""Domain errors raised by MacroMate services."""


class MacroMateError(Exception):
    """Base error for the bot's domain failures."""

    code = "E_DOMAIN"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)


class TokenNotFoundError(MacroMateError):
    """Button token is unknown, evicted or discarded."""

    code = "E_TOKEN_NOT_FOUND"


class MalformedTokenError(TokenNotFoundError):
    """Button token matches none of the known encodings."""

    code = "E_TOKEN_MALFORMED"


class EncodingTooLargeError(MacroMateError):
    """Payload is too large to be minted, even into the store."""

    code = "E_ENCODING_TOO_LARGE"


class MealNotFoundError(MacroMateError):
    code = "E_MEAL_NOT_FOUND"


class FavoriteNotFoundError(MacroMateError):
    code = "E_FAVORITE_NOT_FOUND"


class DuplicateFavoriteError(MacroMateError):
    """Food item is already in the user's favorites."""

    code = "E_FAVORITE_DUPLICATE"


class EstimationError(MacroMateError):
    """Macro estimation oracle failed or returned unusable output."""

    code = "E_ESTIMATION"
