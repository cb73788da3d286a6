from flask import Blueprint, jsonify

from swadaya.utils.helpers import atomic, json_body
from swadaya.utils.settings import get_all_settings, set_setting

settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.route("", methods=["GET"])
def list_settings():
    return jsonify(get_all_settings())


@settings_bp.route("/<string:key>", methods=["PUT"])
def update(key):
    data = json_body()
    with atomic():
        setting = set_setting(key, data.get("value"))
    return jsonify(setting.to_dict())
