from contractai.db.schemas.contract import ContractCreate, ContractDTO

__all__ = ["ContractCreate", "ContractDTO"]
