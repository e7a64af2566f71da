from aibuilder.models.user import User
from aibuilder.models.project import Project
from aibuilder.models.credit_ledger import CreditLedger

__all__ = ["User", "Project", "CreditLedger"]
