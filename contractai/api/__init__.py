"""Flask app factory and blueprints."""
from __future__ import annotations

import logging

from flask import Flask

from contractai.analysis.factory import create_contract_analyzer
from contractai.analysis.orchestrator import ContractAnalyzer
from contractai.db.config import DBConfig
from contractai.db.session import init_db
from contractai.extraction.settings import ExtractionSettings


def create_app(
    *,
    analyzer: ContractAnalyzer | None = None,
    db_config: DBConfig | None = None,
    extraction_settings: ExtractionSettings | None = None,
) -> Flask:
    """Build the Flask app. Pass analyzer to inject a fake completion client in tests."""
    from contractai.api import analyze, contracts

    app = Flask(__name__)
    init_db(db_config)
    app.extensions["contract_analyzer"] = analyzer or create_contract_analyzer()
    app.extensions["extraction_settings"] = extraction_settings or ExtractionSettings()
    app.register_blueprint(analyze.bp)
    app.register_blueprint(contracts.bp)
    logging.getLogger(__name__).info("contractai app ready")
    return app
