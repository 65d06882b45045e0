"""Domain-specific exceptions"""

from datetime import date, timedelta


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Amount, multiplier, date or fee table handed to a calculator is unusable"""

    pass


class ConfigurationError(DomainException):
    """Statutory constants or the RVG table are missing or malformed"""

    pass


class InvoiceTooRecentError(DomainException):
    """Invoice is younger than the minimum age required before a Mahnung"""

    def __init__(self, invoice_date: date, minimum_age_days: int):
        self.invoice_date = invoice_date
        self.minimum_age_days = minimum_age_days
        self.earliest_notice_date = invoice_date + timedelta(days=minimum_age_days)
        super().__init__(
            f"A payment reminder can only be created {minimum_age_days} days after the invoice date. "
            f"This invoice was issued on {invoice_date.strftime('%d.%m.%Y')}."
        )
