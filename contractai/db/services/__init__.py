from contractai.db.services.contract_sink import SqlContractSink

__all__ = ["SqlContractSink"]
