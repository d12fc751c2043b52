class SalaryExplorerError(Exception):
    """Base exception for all salary_explorer errors"""
    pass

class ConfigError(SalaryExplorerError):
    """Invalid or inconsistent global.json"""
    pass

class DatasetSchemaError(SalaryExplorerError):
    """
    Loaded table doesn't match what Dataset expects
    missing required columns, etc
    """
    pass

class OutOfDomainError(SalaryExplorerError):
    """
    A categorical/ordinal projector was asked to map a value that is not
    part of its enumerated domain
    """

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Value {value!r} is not in the domain of field '{field}'")
