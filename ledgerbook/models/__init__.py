# Automatically load all models so metadata knows them
from ledgerbook.models.cheque_model import Cheque, ChequeStatusHistory
from ledgerbook.models.expense_model import Expense, ExpenseCategory
from ledgerbook.models.ledger_account_model import LedgerAccount
from ledgerbook.models.obligation_model import Obligation
from ledgerbook.models.obligation_transaction_model import ObligationTransaction
from ledgerbook.models.order_model import Order
from ledgerbook.models.system_settings_model import SystemSetting
