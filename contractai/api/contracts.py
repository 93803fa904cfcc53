"""Contracts API: list, fetch and delete the caller's analyzed contracts."""
from flask import Blueprint, jsonify, request

from contractai.api.analyze import USER_HEADER
from contractai.db.exceptions import ForbiddenError, NotFoundError
from contractai.db.repositories.contract_repo import ContractRepo
from contractai.db.session import session_scope

bp = Blueprint("contracts", __name__, url_prefix="/api")


def _user_id() -> str | None:
    return request.headers.get(USER_HEADER) or None


@bp.route("/contracts", methods=["GET"])
def list_contracts():
    user_id = _user_id()
    if not user_id:
        return jsonify(None), 401
    with session_scope() as session:
        rows = ContractRepo().list_by_user(session, user_id)
    return jsonify([r.to_api() for r in rows])


@bp.route("/contracts/<contract_id>", methods=["GET"])
def get_contract(contract_id: str):
    user_id = _user_id()
    if not user_id:
        return jsonify(None), 401
    try:
        with session_scope() as session:
            dto = ContractRepo().get_owned(session, contract_id, user_id)
    except NotFoundError:
        return jsonify({"error": "Contract not found"}), 404
    except ForbiddenError:
        return jsonify({"error": "Unauthorized"}), 403
    return jsonify(dto.to_api())


@bp.route("/contracts/<contract_id>", methods=["DELETE"])
def delete_contract(contract_id: str):
    user_id = _user_id()
    if not user_id:
        return jsonify(None), 401
    try:
        with session_scope() as session:
            ContractRepo().delete_owned(session, contract_id, user_id)
    except NotFoundError:
        return jsonify({"error": "Contract not found"}), 404
    except ForbiddenError:
        return jsonify({"error": "Unauthorized"}), 403
    return jsonify({"success": True})
