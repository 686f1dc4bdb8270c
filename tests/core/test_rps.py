"""Tests for Rock-Paper-Scissors-Lizard-Spock."""

import pytest
from random import Random
from hypothesis import given, strategies as st

from config import GameConfig
from core.rps import (
    OPPONENT_NAMES,
    PERSONALITIES,
    AdaptiveOpponent,
    Move,
    Result,
    RPSMatch,
)


class TestMoves:
    def test_each_move_beats_two(self):
        for move in Move:
            assert sum(move.beats(other) for other in Move) == 2

    @pytest.mark.parametrize("move", list(Move))
    def test_beats_is_antisymmetric(self, move):
        for other in Move:
            assert not (move.beats(other) and other.beats(move))
        assert not move.beats(move)

    def test_classic_pairs(self):
        assert Move.ROCK.beats(Move.SCISSORS)
        assert Move.PAPER.beats(Move.SPOCK)
        assert Move.LIZARD.beats(Move.PAPER)
        assert Move.SPOCK.beats(Move.SCISSORS)
        assert not Move.ROCK.beats(Move.PAPER)

    def test_from_token(self):
        assert Move.from_token(" Spock ") is Move.SPOCK
        with pytest.raises(ValueError):
            Move.from_token("dynamite")


class TestPersonalities:
    def test_every_opponent_has_weights(self):
        assert set(PERSONALITIES) == set(OPPONENT_NAMES)

    @pytest.mark.parametrize("name", OPPONENT_NAMES)
    def test_weights_sum_to_hundred(self, name):
        assert sum(PERSONALITIES[name].values()) == 100

    def test_single_move_personalities(self):
        assert PERSONALITIES["Hal"][Move.SPOCK] == 100
        assert PERSONALITIES["Chappie"][Move.SCISSORS] == 100
        assert PERSONALITIES["Sonny"][Move.PAPER] == 100

    def test_personality_is_copied(self):
        opponent = AdaptiveOpponent.from_personality("R2D2")
        opponent.weights[Move.ROCK] = 0
        assert PERSONALITIES["R2D2"][Move.ROCK] == 20


class TestAdaptiveOpponent:
    def test_zero_weight_moves_never_chosen(self, rng):
        opponent = AdaptiveOpponent.from_personality("Hal")
        assert {opponent.choose(rng) for _ in range(50)} == {Move.SPOCK}

    def test_win_reinforces_last_move(self, rng):
        opponent = AdaptiveOpponent.from_personality("R2D2")
        opponent.history.append(Move.ROCK)
        opponent.adjust(Result.WIN)

        assert opponent.weights[Move.ROCK] == 40
        assert all(opponent.weights[m] == 15 for m in Move if m is not Move.ROCK)

    def test_loss_weakens_last_move(self):
        opponent = AdaptiveOpponent.from_personality("Hal")
        opponent.history.append(Move.SPOCK)
        opponent.adjust(Result.LOSS)

        assert opponent.weights[Move.SPOCK] == 80
        assert all(opponent.weights[m] == 5 for m in Move if m is not Move.SPOCK)

    def test_tie_leaves_weights(self):
        opponent = AdaptiveOpponent.from_personality("R2D2")
        opponent.history.append(Move.ROCK)
        opponent.adjust(Result.TIE)
        assert opponent.weights == PERSONALITIES["R2D2"]

    @given(
        st.sampled_from(OPPONENT_NAMES),
        st.lists(
            st.tuples(st.sampled_from(list(Move)), st.sampled_from([Result.WIN, Result.LOSS])),
            max_size=60,
        ),
    )
    def test_weights_stay_a_distribution(self, name, rounds):
        opponent = AdaptiveOpponent.from_personality(name)
        for move, result in rounds:
            opponent.history.append(move)
            opponent.adjust(result)
            assert sum(opponent.weights.values()) == 100
            assert all(0 <= w <= 100 for w in opponent.weights.values())


class TestRPSMatch:
    def test_human_win_scores(self, rng, game_config):
        match = RPSMatch("Alice", rng=rng, game_config=game_config, opponent_name="Hal")
        result = match.play_round(Move.PAPER)

        assert result.computer_move is Move.SPOCK
        assert result.winner == "Alice"
        assert match.human_score == 1
        assert match.opponent.weights[Move.SPOCK] == 80

    def test_computer_win_scores(self, rng, game_config):
        match = RPSMatch("Alice", rng=rng, game_config=game_config, opponent_name="Hal")
        result = match.play_round(Move.ROCK)

        assert result.winner == "Hal"
        assert match.computer_score == 1
        assert match.opponent.weights[Move.SPOCK] == 100

    def test_tie_scores_nobody(self, rng, game_config):
        match = RPSMatch("Alice", rng=rng, game_config=game_config, opponent_name="Sonny")
        result = match.play_round(Move.PAPER)

        assert result.winner is None
        assert (match.human_score, match.computer_score) == (0, 0)

    def test_grand_winner_and_reset(self, rng):
        config = GameConfig(rps_max_wins=1, pause_seconds=0)
        match = RPSMatch("Alice", rng=rng, game_config=config, opponent_name="Hal")
        match.play_round(Move.PAPER)

        assert match.grand_winner == "Alice"
        with pytest.raises(RuntimeError):
            match.play_round(Move.PAPER)

        match.reset()
        assert match.grand_winner is None
        assert match.human_score == 0
        assert match.rounds == []

    def test_rounds_logged_in_order(self, rng, game_config):
        match = RPSMatch("Alice", rng=rng, game_config=game_config, opponent_name="Hal")
        first = match.play_round(Move.PAPER)
        second = match.play_round(Move.ROCK)

        assert match.rounds == [first, second]
        assert [r.human_move for r in match.rounds] == [Move.PAPER, Move.ROCK]

    def test_default_opponent_from_pool(self, game_config):
        names = {
            RPSMatch("Alice", rng=Random(seed), game_config=game_config).opponent.name
            for seed in range(30)
        }
        assert names <= set(OPPONENT_NAMES)
