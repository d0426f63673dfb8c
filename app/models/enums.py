"""Centralized Enum Definitions"""

import enum


# Sentinels
CURRENT_TERM = "Current"
NO_BURSARY = "none"


# Domain 1: Students
class EnrollmentStatus(str, enum.Enum):
    """Lifecycle status of an enrolled student"""
    ACTIVE = "active"
    DEACTIVATED = "deactivated"
    GRADUATED = "graduated"
    SUSPENDED = "suspended"


class AccountStatus(str, enum.Enum):
    """Manually assigned financial standing"""
    CLEARANCE = "clearance"
    PROBATION = "probation"
    DEFAULTER = "defaulter"

    @classmethod
    def _missing_(cls, value):
        # Older records store "cleared"
        if isinstance(value, str) and value.lower() == "cleared":
            return cls.CLEARANCE
        return None


class StatusColor(str, enum.Enum):
    """Ring colours for account status"""
    GREEN = "#10b981"
    PURPLE = "#8b5cf6"
    RED = "#ef4444"


class PromotionAction(str, enum.Enum):
    """What happens to a student at the end of a term"""
    PROMOTE = "promote"
    GRADUATE = "graduate"
    DEACTIVATE = "deactivate"


# Domain 2: Ledger
class BillingType(str, enum.Enum):
    """Well-known billing types. Billing.type stays free text."""
    TUITION = "Tuition"
    SERVICE = "Service"
    ADJUSTMENT = "Adjustment"
    BROUGHT_FORWARD = "Balance Brought Forward"


class BillingStatus(str, enum.Enum):
    """Billing settlement status"""
    PENDING = "Pending"
    PARTIALLY_PAID = "Partially Paid"
    PAID = "Paid"
    VOID = "Void"


class PaymentType(str, enum.Enum):
    """Audit tag separating real receipts from balance fixes"""
    PAYMENT = "payment"
    ADJUSTMENT = "adjustment"


class PaymentStatus(str, enum.Enum):
    """Payment approval workflow"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class CorrectionKind(str, enum.Enum):
    """Direction of a balance correction"""
    CREDIT = "credit"
    DEBIT = "debit"


class AccountGroup(str, enum.Enum):
    """Groups that receiving accounts belong to"""
    CASH = "Cash"
    ACCOUNTS = "Accounts"
    BANK_ACCOUNTS = "Bank Accounts"
    CARD = "Card"


# Domain 3: Audit
class AuditCategory(str, enum.Enum):
    """Categories written to the audit log"""
    BALANCE_CORRECTION = "Balance Correction"
    STATUS_CHANGE = "Account Status Change"
    BILLING_DELETED = "Billing Deleted"
    BILLING_RESTORED = "Billing Restored"
    PAYMENT_DELETED = "Payment Deleted"
    PAYMENT_RESTORED = "Payment Restored"
    PROMOTION = "Promotion"
