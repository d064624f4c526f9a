import random

import pytest

from tabletop.errors import GameRuleError, NotFoundError
from tabletop.services.games import (
    azul, catan, counter, dice_roller, fortune_orb, munchkin, player_selector,
    roster, seven_wonders, ticket_to_ride, tic_tac_toe, uno,
)


# ---- 7 Wonders ----

@pytest.mark.parametrize('c,g,t', [(0, 0, 0), (1, 0, 0), (3, 2, 2), (4, 4, 4), (5, 1, 0), (2, 7, 3)])
def test_science_formula(c, g, t):
    assert seven_wonders.science_points(c, g, t) == c * c + g * g + t * t + 7 * min(c, g, t)


def test_science_example():
    assert seven_wonders.science_points(3, 2, 2) == 31


def test_seven_wonders_total_and_ranking():
    state = seven_wonders.default_state()
    seven_wonders.add_player(state)
    first, second = state['players']
    first.update(military=5, treasury=8, wonder=3)
    first['science'] = {'compass': 1, 'gear': 1, 'tablet': 1}
    second.update(civilian=12)
    # 5 + 8//3 + 3 + (3 + 7) = 20
    assert seven_wonders.total_score(first) == 20
    results = seven_wonders.results(state['players'])
    assert [r['id'] for r in results] == [first['id'], second['id']]
    assert results[0]['breakdown']['treasury'] == 2


def test_seven_wonders_clamps_and_limits():
    state = seven_wonders.default_state()
    seven_wonders.adjust(state, 1, 'military', -3)
    assert state['players'][0]['military'] == 0
    seven_wonders.set_science(state, 1, 'gear', 'abc')
    assert state['players'][0]['science']['gear'] == 0
    for _ in range(6):
        seven_wonders.add_player(state)
    with pytest.raises(GameRuleError):
        seven_wonders.add_player(state)
    with pytest.raises(GameRuleError):
        seven_wonders.adjust(state, 1, 'gold', 1)


# ---- Azul ----

def _wall(*cells):
    wall = azul.empty_wall()
    for r, c in cells:
        wall[r][c] = True
    return wall


def test_azul_isolated_tile_scores_one():
    wall = _wall((2, 2))
    assert azul.placement_points(wall, 2, 2) == 1


def test_azul_horizontal_run_of_three():
    wall = _wall((0, 0), (0, 1), (0, 2))
    assert azul.placement_points(wall, 0, 2) == 3


def test_azul_horizontal_and_vertical_runs():
    # New tile at (2, 1): horizontal run of 2, vertical run of 3
    wall = _wall((2, 0), (0, 1), (1, 1), (2, 1))
    assert azul.placement_points(wall, 2, 1) == 5


def test_azul_wall_pattern_is_diagonal():
    for color in azul.TILE_COLORS:
        cols = [azul.WALL_PATTERN[row].index(color) for row in range(azul.SIZE)]
        assert sorted(cols) == list(range(azul.SIZE))
    assert azul.WALL_PATTERN[1] == ('cyan', 'blue', 'yellow', 'red', 'black')


@pytest.mark.parametrize('n', range(0, 8))
def test_floor_penalty_prefix_sums(n):
    assert azul.floor_penalty(n) == sum([-1, -1, -2, -2, -2, -3, -3][:n])


def test_floor_penalty_caps_at_seven_tiles():
    assert azul.floor_penalty(9) == azul.floor_penalty(7) == -14


def test_end_game_bonus_increments():
    wall = azul.empty_wall()
    assert azul.end_game_bonus(wall) == 0
    wall[0] = [True] * 5
    assert azul.end_game_bonus(wall) == 2
    for row in range(1, 5):
        wall[row][4] = True
    # Column 4 complete as well
    assert azul.end_game_bonus(wall) == 2 + 7
    for row in range(5):
        wall[row][azul.WALL_PATTERN[row].index('red')] = True
    assert azul.completions(wall) == {'rows': 1, 'cols': 1, 'colors': 1}
    assert azul.end_game_bonus(wall) == 2 + 7 + 10


def test_full_wall_bonus():
    wall = [[True] * 5 for _ in range(5)]
    assert azul.end_game_bonus(wall) == 5 * 2 + 5 * 7 + 5 * 10


def test_azul_one_tile_per_row_and_undo():
    state = azul.default_state()
    azul.toggle_tile(state, 1, 0, 0)
    assert state['players'][0]['roundScore'] == 1
    with pytest.raises(GameRuleError):
        azul.toggle_tile(state, 1, 0, 1)
    azul.toggle_tile(state, 1, 1, 0)
    assert state['players'][0]['roundScore'] == 1 + 2
    # Taking back the tile reverses its points
    azul.toggle_tile(state, 1, 1, 0)
    assert state['players'][0]['roundScore'] == 1
    assert state['players'][0]['tilesPlacedThisRound'] == [0]


def test_azul_end_round_banks_score_with_floor():
    state = azul.default_state()
    azul.toggle_tile(state, 1, 0, 0)
    azul.adjust_floor(state, 1, 3)
    azul.end_round(state)
    player = state['players'][0]
    # max(0, 0 + 1 - 4)
    assert player['score'] == 0
    assert player['floorTiles'] == 0
    assert player['roundScore'] == 0
    assert state['currentRound'] == 2
    with pytest.raises(GameRuleError):
        azul.toggle_tile(state, 1, 0, 0)


def test_azul_complete_row_ends_game():
    state = azul.default_state()
    player = state['players'][0]
    player['wall'][4] = [True] * 5
    player['score'] = 30
    azul.end_round(state)
    assert state['currentRound'] == 1
    assert state['results'][0]['finalScore'] == 32
    assert state['results'][0]['endGameBonus'] == 2


def test_azul_finished_game_is_frozen():
    state = azul.default_state()
    state['players'][0]['wall'][4] = [True] * 5
    azul.end_round(state)
    results = state['results']
    assert results is not None
    with pytest.raises(GameRuleError):
        azul.toggle_tile(state, 1, 0, 0)
    with pytest.raises(GameRuleError):
        azul.adjust_floor(state, 1, 1)
    with pytest.raises(GameRuleError):
        azul.end_round(state)
    with pytest.raises(GameRuleError):
        azul.finish(state)
    assert state['results'] == results
    azul.reset(state)
    assert state['results'] is None
    azul.toggle_tile(state, 1, 0, 0)


def test_azul_player_limit():
    state = azul.default_state()
    for _ in range(3):
        azul.add_player(state)
    with pytest.raises(GameRuleError):
        azul.add_player(state)


# ---- Catan ----

def test_catan_victory_points():
    player = catan.new_player(1, 0)
    player.update(settlements=2, cities=3, devCards=1, hasLongestRoad=True)
    assert catan.victory_points(player) == 2 + 6 + 1 + 2
    assert catan.find_winner([player])['id'] == 1


def test_catan_longest_road_is_exclusive():
    state = catan.default_state()
    catan.add_player(state)
    catan.toggle_longest_road(state, 1)
    catan.toggle_longest_road(state, 2)
    assert [p['hasLongestRoad'] for p in state['players']] == [False, True]
    catan.toggle_longest_road(state, 2)
    assert not any(p['hasLongestRoad'] for p in state['players'])


def test_catan_counts_never_negative():
    state = catan.default_state()
    catan.adjust(state, 1, 'cities', -2)
    assert state['players'][0]['cities'] == 0


def test_catan_dice_range():
    rng = random.Random(7)
    for _ in range(50):
        roll = catan.roll_dice(rng)
        assert 1 <= roll['dice1'] <= 6 and 1 <= roll['dice2'] <= 6
        assert roll['total'] == roll['dice1'] + roll['dice2']


# ---- Munchkin ----

def test_munchkin_level_bounds():
    state = munchkin.default_state()
    munchkin.change_level(state, 1, -5)
    assert state['players'][0]['level'] == 1
    munchkin.change_level(state, 1, 20)
    assert state['players'][0]['level'] == 10
    assert munchkin.summary(state)['winner']['id'] == 1


def test_munchkin_battle_tie_goes_to_monsters():
    state = munchkin.default_state()
    state['players'][0].update(level=4, gear=3)
    result = munchkin.battle(state, [{'player_id': 1, 'bonuses': [2, -1]}], [{'strength': 8}])
    assert result['players_total'] == 8
    assert result['outcome'] == 'monsters'
    result = munchkin.battle(state, [{'player_id': 1, 'bonuses': [2]}], [{'strength': 8}])
    assert result['outcome'] == 'players'


def test_munchkin_battle_validation():
    state = munchkin.default_state()
    with pytest.raises(GameRuleError):
        munchkin.battle(state, [{'player_id': 1}], [{'strength': 0}])
    with pytest.raises(GameRuleError):
        munchkin.battle(state, [{'player_id': 1}, {'player_id': 1}], [{'strength': 3}])
    with pytest.raises(GameRuleError):
        munchkin.battle(state, [], [{'strength': 3}])


def test_munchkin_battle_rejects_malformed_bonuses():
    state = munchkin.default_state()
    with pytest.raises(GameRuleError):
        munchkin.battle(state, [{'player_id': 1, 'bonuses': '12'}], [{'strength': 3}])
    with pytest.raises(GameRuleError):
        munchkin.battle(state, [{'player_id': 1}], [{'strength': 3, 'bonuses': 3}])
    with pytest.raises(GameRuleError):
        munchkin.battle(state, ['1'], [{'strength': 3}])
    with pytest.raises(GameRuleError):
        munchkin.battle(state, [{'player_id': 1}], [5])
    with pytest.raises(GameRuleError):
        munchkin.battle(state, [{'player_id': 1, 'bonuses': [1.5]}], [{'strength': 3}])


def test_munchkin_normalize_fills_defaults():
    state = munchkin.normalize({'players': [{'id': 1, 'name': 'A', 'level': 3}]})
    assert state['players'][0]['gear'] == 0
    assert state['players'][0]['curses'] == 0


# ---- Ticket to Ride ----

def test_route_points_table():
    assert [ticket_to_ride.route_points(n) for n in range(1, 9)] == [1, 2, 4, 7, 10, 15, 18, 21]
    with pytest.raises(GameRuleError):
        ticket_to_ride.route_points(9)


def test_ticket_to_ride_undo_window():
    state = ticket_to_ride.default_state()
    ticket_to_ride.claim_route(state, 2, 6, now_ms=1000)
    assert state['players'][1]['score'] == 15
    ticket_to_ride.undo(state, now_ms=3000, undo_window_sec=5)
    assert state['players'][1]['score'] == 0
    with pytest.raises(GameRuleError):
        ticket_to_ride.undo(state, now_ms=3000)

    ticket_to_ride.claim_route(state, 2, 6, now_ms=1000)
    with pytest.raises(GameRuleError):
        ticket_to_ride.undo(state, now_ms=7001, undo_window_sec=5)


def test_ticket_to_ride_longest_route_moves():
    state = ticket_to_ride.default_state()
    ticket_to_ride.toggle_longest_route(state, 1)
    assert state['players'][0]['score'] == 10
    ticket_to_ride.toggle_longest_route(state, 3)
    assert state['players'][0]['score'] == 0
    assert state['players'][2]['score'] == 10
    assert [p['longestRoute'] for p in state['players']].count(True) == 1


def test_ticket_to_ride_tickets_can_go_negative():
    state = ticket_to_ride.default_state()
    ticket_to_ride.tickets(state, 1, -8)
    assert state['players'][0]['score'] == -8
    ticket_to_ride.adjust(state, 1, -1)
    assert state['players'][0]['score'] == 0


def test_ticket_to_ride_color_reuse():
    state = ticket_to_ride.default_state()
    with pytest.raises(GameRuleError):
        ticket_to_ride.add_player(state)
    ticket_to_ride.remove_player(state, 2)
    ticket_to_ride.add_player(state)
    assert state['players'][-1]['color']['name'] == 'Red'
    assert state['players'][-1]['id'] == 6


# ---- UNO ----

def _uno(condition, target='100'):
    state = uno.default_state()
    uno.configure(state, win_condition=condition, target_score=target)
    uno.start(state)
    return state


def test_uno_lowest_accumulates():
    state = _uno('lowest')
    uno.set_round_score(state, 1, '40')
    uno.set_round_score(state, 2, '')
    uno.next_round(state)
    assert [p['totalScore'] for p in state['players']] == [40, 0]
    assert state['currentRound'] == 2
    assert state['winner'] is None
    uno.set_round_score(state, 1, 70)
    uno.next_round(state)
    assert state['winner']['id'] == 2


def test_uno_highest_winner_takes_pot():
    state = _uno('highest')
    uno.add_player(state)
    uno.set_round_score(state, 2, 30)
    uno.set_round_score(state, 3, 25)
    uno.next_round(state)
    assert [p['totalScore'] for p in state['players']] == [55, 0, 0]


def test_uno_highest_needs_a_round_winner():
    state = _uno('highest')
    uno.set_round_score(state, 1, 5)
    uno.set_round_score(state, 2, 5)
    with pytest.raises(GameRuleError):
        uno.next_round(state)
    uno.set_round_score(state, 1, 0)
    uno.set_round_score(state, 2, 0)
    with pytest.raises(GameRuleError):
        uno.next_round(state)
    uno.next_round(state, winner_id=2)
    assert state['currentRound'] == 2


def test_uno_start_requires_target():
    state = uno.default_state()
    with pytest.raises(GameRuleError):
        uno.configure(state, target_score='abc')
    assert state['targetScore'] == '500'
    state['targetScore'] = '0'
    with pytest.raises(GameRuleError):
        uno.start(state)


def test_uno_target_cannot_be_broken_mid_game():
    state = _uno('lowest')
    for bad in ('abc', 0, -10, ''):
        with pytest.raises(GameRuleError):
            uno.configure(state, target_score=bad)
    assert state['targetScore'] == '100'
    uno.set_round_score(state, 1, 5)
    uno.next_round(state)
    assert state['winner'] is None


def test_uno_rounds_need_a_started_game():
    state = uno.default_state()
    with pytest.raises(GameRuleError):
        uno.set_round_score(state, 1, 5)
    with pytest.raises(GameRuleError):
        uno.next_round(state)
    assert state['currentRound'] == 1


def test_uno_keeps_two_players():
    state = uno.default_state()
    with pytest.raises(GameRuleError):
        uno.remove_player(state, 1)


# ---- Counter, dice, tic-tac-toe ----

def test_counter_stale_save_is_discarded():
    state = counter.default_state()
    counter.adjust(state, 1, 5)
    counter.before_save(state, now_ms=0)
    assert counter.normalize(state, now_ms=1000)['players'][0]['score'] == 5
    assert counter.normalize(state, now_ms=counter.AUTO_SAVE_TIMEOUT_MS)['players'][0]['score'] == 0


def test_counter_set_score_rejects_text():
    state = counter.default_state()
    with pytest.raises(GameRuleError):
        counter.set_score(state, 1, 'ten')
    with pytest.raises(NotFoundError):
        counter.adjust(state, 99, 1)


def test_dice_roll_history_is_capped():
    state = dice_roller.default_state()
    dice_roller.add_die(state, 1, 6)
    dice_roller.add_die(state, 1, 20)
    rng = random.Random(1)
    for i in range(12):
        dice_roller.roll(state, 1, rng=rng, now_ms=1000 + i)
    rolls = state['players'][0]['rolls']
    assert len(rolls) == dice_roller.ROLL_HISTORY
    assert rolls[0]['id'] == 1011
    for roll in rolls:
        assert roll['total'] == sum(r['result'] for r in roll['results'])
        assert 1 <= roll['results'][0]['result'] <= 6


def test_dice_rejects_unknown_die_and_empty_roll():
    state = dice_roller.default_state()
    with pytest.raises(GameRuleError):
        dice_roller.add_die(state, 1, 7)
    with pytest.raises(GameRuleError):
        dice_roller.roll(state, 1)
    with pytest.raises(GameRuleError):
        dice_roller.roll_all(state)


def test_tic_tac_toe_win_counts_once():
    state = tic_tac_toe.default_state()
    for cell in (0, 3, 1, 4, 2):
        tic_tac_toe.play(state, cell)
    assert tic_tac_toe.winner(state['board']) == 'X'
    assert tic_tac_toe.winning_line(state['board']) == [0, 1, 2]
    assert state['scores'] == {'X': 1, 'O': 0, 'draws': 0}
    with pytest.raises(GameRuleError):
        tic_tac_toe.play(state, 8)
    tic_tac_toe.new_round(state)
    assert state['scores']['X'] == 1
    assert state['xIsNext'] is True


def test_tic_tac_toe_draw():
    state = tic_tac_toe.default_state()
    for cell in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        tic_tac_toe.play(state, cell)
    assert tic_tac_toe.is_draw(state['board'])
    assert state['scores']['draws'] == 1


# ---- stateless tools ----

def test_player_selector_picks_a_participant():
    result = player_selector.select(['a', 'b', 'c'], rng=random.Random(3))
    assert result['selected'] in ('a', 'b', 'c')
    with pytest.raises(GameRuleError):
        player_selector.select(['a', 'a'])


def test_fortune_orb_answers():
    assert len(fortune_orb.ALL_ANSWERS) == 20
    result = fortune_orb.ask('Will it rain?', rng=random.Random(0))
    assert result['answer'] in fortune_orb.ANSWERS[result['category']]


# ---- Shared roster helpers ----

@pytest.mark.parametrize('value,expected', [(3, 3), ('-2', -2), (4.0, 4), (' 7 ', 7)])
def test_as_int_accepts_whole_numbers(value, expected):
    assert roster.as_int(value, 'amount') == expected


@pytest.mark.parametrize('value', [1.9, -0.5, 'abc', '1.5', True, [1]])
def test_as_int_rejects_fractions_and_junk(value):
    with pytest.raises(GameRuleError, match='amount must be a whole number'):
        roster.as_int(value, 'amount')
