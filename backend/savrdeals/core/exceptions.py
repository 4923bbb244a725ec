class SavrdealsError(Exception):
    """Base exception for the Savrdeals backend."""

    pass


class UnknownBadgeError(SavrdealsError):
    """Raised when a badge id is not part of the milestone catalog."""

    def __init__(self, badge_id: str):
        self.badge_id = badge_id
        super().__init__(f"Unknown badge '{badge_id}'")


class BadgeLockedError(SavrdealsError):
    """Raised when a user tries to equip a badge their balance has not reached."""

    def __init__(self, badge_id: str, required_coins: int, coins: float):
        self.badge_id = badge_id
        self.required_coins = required_coins
        self.coins = coins
        super().__init__(
            f"Badge '{badge_id}' requires {required_coins} coins (balance: {coins})"
        )


class SupabaseError(SavrdealsError):
    """Raised when a call to the Supabase REST API fails."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class DealCatalogError(SavrdealsError):
    """Raised when the static deal catalog cannot be loaded."""

    pass


class MailConfigurationError(SavrdealsError):
    """Raised when SMTP credentials are missing."""

    pass


class MailDeliveryError(SavrdealsError):
    """Raised when the SMTP server rejects or drops a message."""

    pass
