class AuctionError(Exception):
    """Base class for auction derivation failures."""

class InvalidTransactionType(AuctionError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown transaction type: {value!r}")

class AuctionNotEnded(AuctionError):
    def __init__(self, status):
        self.status = status
        super().__init__(f"Auction has not ended (status: {getattr(status, 'value', status)})")
