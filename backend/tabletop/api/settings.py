from flask import Blueprint, jsonify, request
from tabletop.services import settings as svc


settings = Blueprint('settings', __name__)


@settings.route('/theme', methods=['GET'])
def get_theme():
    return jsonify(svc.theme_payload(svc.is_dark_mode()))


@settings.route('/theme', methods=['PUT'])
def set_theme():
    data = request.get_json(silent=True) or {}
    dark = data.get('isDarkMode')
    if not isinstance(dark, bool):
        return jsonify({'error': 'isDarkMode must be true or false'}), 400
    return jsonify(svc.theme_payload(svc.set_dark_mode(dark)))


@settings.route('/premium', methods=['GET'])
def get_premium():
    return jsonify({'isPremium': svc.is_premium()})


@settings.route('/premium/toggle', methods=['POST'])
def toggle_premium():
    return jsonify({'isPremium': svc.toggle_premium()})


@settings.route('/app/background', methods=['POST'])
def app_background():
    return jsonify({'appBackgroundTime': svc.mark_background()})


@settings.route('/app/foreground', methods=['POST'])
def app_foreground():
    return jsonify(svc.resume())
