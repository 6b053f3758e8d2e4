"""Application use cases."""

from shopledger.application.use_cases.change_password import ChangePasswordUseCase
from shopledger.application.use_cases.delete_purchase import DeletePurchaseUseCase
from shopledger.application.use_cases.delete_sale import DeleteSaleUseCase
from shopledger.application.use_cases.login_user import LoginUserUseCase
from shopledger.application.use_cases.record_purchase import (
    LedgerChangeResult,
    RecordPurchaseUseCase,
)
from shopledger.application.use_cases.record_sale import RecordSaleUseCase
from shopledger.application.use_cases.revise_purchase import RevisePurchaseUseCase
from shopledger.application.use_cases.revise_sale import ReviseSaleUseCase
from shopledger.application.use_cases.run_auto_backup import (
    AutoBackupResult,
    RunAutoBackupUseCase,
)
from shopledger.application.use_cases.setup_admin import SetupAdminUseCase

__all__ = [
    "LedgerChangeResult",
    "RecordPurchaseUseCase",
    "RevisePurchaseUseCase",
    "DeletePurchaseUseCase",
    "RecordSaleUseCase",
    "ReviseSaleUseCase",
    "DeleteSaleUseCase",
    "SetupAdminUseCase",
    "LoginUserUseCase",
    "ChangePasswordUseCase",
    "RunAutoBackupUseCase",
    "AutoBackupResult",
]
