class ImportErrorBase(Exception):
    """Base class for failures of an import call."""


class AccountNotFoundError(ImportErrorBase):
    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class ImportRecordNotFoundError(ImportErrorBase):
    def __init__(self, import_id: str):
        self.import_id = import_id
        super().__init__(f"Import record not found: {import_id}")
