import enum


class InvoiceStatus(enum.Enum):
    PAID = "PAID"
    ISSUED = "ISSUED"
    CANCELLED = "CANCELLED"


class PaymentMethod(enum.Enum):
    CREDIT_CARD = "CREDIT_CARD"
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"
    PAYPAL = "PAYPAL"


class OrderStatus(enum.Enum):
    COMPLETED = "COMPLETED"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"
