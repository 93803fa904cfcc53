from contractai.db.repositories.contract_repo import ContractRepo

__all__ = ["ContractRepo"]
