from flask import Blueprint, request, jsonify, current_app

bp_auth = Blueprint("auth", __name__)

@bp_auth.post("/validate")
def validate():
    payload = request.get_json(silent=True)
    init_data = payload.get("initData") if isinstance(payload, dict) else None
    if not init_data or not isinstance(init_data, str):
        return jsonify(ok=False, error="initData required"), 400

    res = current_app.extensions["tg_auth"].check(init_data)
    if not res.ok:
        # причина отказа остаётся в логах, клиент её не видит
        return jsonify(ok=False, error="invalid init data"), 401

    return jsonify(ok=True, fields=res.fields, user=res.user)
