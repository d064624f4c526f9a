import random

from flask import Blueprint, jsonify, request
from tabletop.services.games import catan, fortune_orb, munchkin, player_selector, registry


tools = Blueprint('tools', __name__)


@tools.route('/player-selector', methods=['POST'])
def select_player():
    data = request.get_json(silent=True) or {}
    return jsonify(player_selector.select(data.get('participants'), rng=random))


@tools.route('/fortune-orb', methods=['GET', 'POST'])
def ask_orb():
    data = request.get_json(silent=True) or {}
    question = data.get('question') or request.args.get('question')
    return jsonify(fortune_orb.ask(question, rng=random))


@tools.route('/catan-dice', methods=['POST'])
def roll_catan_dice():
    return jsonify(catan.roll_dice(rng=random))


@tools.route('/munchkin-battle', methods=['POST'])
def munchkin_battle():
    data = request.get_json(silent=True) or {}
    state = registry.load_state(munchkin)
    return jsonify(munchkin.battle(state, data.get('players'), data.get('monsters')))
