"""
Unit tests for the Session state machine.
"""

import pytest
from chess_relay.session import (Session, Participant, Color, Status,
                                 SessionFullError, NotYourTurnError)


def make_active_session():
    session = Session(id='abc123')
    session.add_player('sid-a')
    session.add_player('sid-b')
    return session


class TestColor:

    def test_opposite(self):
        assert Color.WHITE.opposite() is Color.BLACK
        assert Color.BLACK.opposite() is Color.WHITE

    def test_wire_values(self):
        assert Color.WHITE.value == 'w'
        assert Color.BLACK.value == 'b'


class TestSeating:
    """Test cases for adding participants."""

    def test_new_session_defaults(self):
        session = Session(id='abc123')
        assert session.players == []
        assert session.turn is Color.WHITE
        assert session.status is Status.WAITING
        assert session.position is None
        assert session.moves_list == []
        assert session.result is None

    def test_first_player_is_white_and_waiting(self):
        session = Session(id='abc123')
        player = session.add_player('sid-a')
        assert player == Participant('sid-a', Color.WHITE)
        assert session.status is Status.WAITING

    def test_second_player_is_black_and_starts_game(self):
        session = Session(id='abc123')
        session.add_player('sid-a')
        player = session.add_player('sid-b')
        assert player.color is Color.BLACK
        assert session.status is Status.ACTIVE
        assert [p.connection_id for p in session.players] == ['sid-a', 'sid-b']

    def test_third_player_rejected(self):
        session = make_active_session()
        with pytest.raises(SessionFullError) as exc_info:
            session.add_player('sid-c')
        assert exc_info.value.message == 'Game is full'
        assert len(session.players) == 2

    def test_join_after_finish_keeps_finished(self):
        session = Session(id='abc123')
        session.add_player('sid-a')
        session.finish('resigned')
        session.add_player('sid-b')
        assert session.status is Status.FINISHED
        assert len(session.players) == 2

    def test_participant_lookup(self):
        session = make_active_session()
        assert session.participant('sid-b').color is Color.BLACK
        assert session.participant('nobody') is None


class TestMoves:
    """Test cases for turn order and move history."""

    def test_white_move_appends_pair(self):
        session = make_active_session()
        session.apply_move('pos1', 'e4', 'wP')
        assert session.moves_list == [['e4', '']]
        assert session.turn is Color.BLACK
        assert session.position == 'pos1'
        assert session.move_number == 1

    def test_black_move_fills_last_pair(self):
        session = make_active_session()
        session.apply_move('pos1', 'e4', 'wP')
        session.apply_move('pos2', 'e5', 'bP')
        assert session.moves_list == [['e4', 'e5']]
        assert session.turn is Color.WHITE
        assert session.position == 'pos2'
        assert session.move_number == 1

    def test_turn_alternates(self):
        session = make_active_session()
        pieces = ['wN', 'bN', 'wB', 'bB', 'wQ']
        for n, piece in enumerate(pieces, start=1):
            session.apply_move(f'pos{n}', f'm{n}', piece)
            expected = Color.WHITE if n % 2 == 0 else Color.BLACK
            assert session.turn is expected
        assert session.move_number == 3
        assert session.moves_list[-1] == ['m5', '']

    def test_wrong_colour_leaves_state_unchanged(self):
        session = make_active_session()
        session.apply_move('pos1', 'e4', 'wP')
        before = (session.turn, session.position, [list(p) for p in session.moves_list])

        with pytest.raises(NotYourTurnError) as exc_info:
            session.apply_move('pos2', 'd4', 'wP')

        assert exc_info.value.message == 'Not your turn'
        assert (session.turn, session.position, session.moves_list) == before

    @pytest.mark.parametrize('piece', ['', None, 'xK', 'WP'])
    def test_unrecognised_piece_is_not_your_turn(self, piece):
        session = make_active_session()
        with pytest.raises(NotYourTurnError):
            session.apply_move('pos1', 'e4', piece)
        assert session.moves_list == []

    def test_black_move_with_empty_history_only_flips_turn(self):
        session = make_active_session()
        session.turn = Color.BLACK
        session.apply_move('pos1', 'e5', 'bP')
        assert session.moves_list == []
        assert session.turn is Color.WHITE
        assert session.position == 'pos1'

    def test_position_is_passed_through(self):
        session = make_active_session()
        position = {'fen': 'whatever', 'extra': [1, 2]}
        session.apply_move(position, 'e4', 'wP')
        assert session.position is position


class TestFinish:

    def test_finish_sets_result(self):
        session = make_active_session()
        session.finish({'winner': 'w'})
        assert session.status is Status.FINISHED
        assert session.result == {'winner': 'w'}

    def test_to_dict(self):
        session = make_active_session()
        session.apply_move('pos1', 'e4', 'wP')
        data = session.to_dict()
        assert data == {
            'game_id': 'abc123',
            'players': [{'id': 'sid-a', 'color': 'w'}, {'id': 'sid-b', 'color': 'b'}],
            'turn': 'b',
            'status': 'active',
            'position': 'pos1',
            'move_number': 1,
            'moves_list': [['e4', '']],
            'result': None
        }
